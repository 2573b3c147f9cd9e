import pytest, jwt, datetime as dt
import payback.application.exceptions as appexc
from payback.infrastructure.security import JWTTokenIssuer

SECRET = 'unit-test-secret-that-is-long-enough-for-hs256'


def test_issue_encodes_username_and_expiry():
    issuer = JWTTokenIssuer(jwt_secret=SECRET, expires_mins=30, algorithm='HS256')
    before = dt.datetime.now(dt.timezone.utc).timestamp()
    token = issuer.issue('alice')

    data = jwt.decode(token, SECRET, algorithms=['HS256'])
    assert data['username'] == 'alice'
    assert before + 30 * 60 - 5 <= data['exp'] <= before + 30 * 60 + 5
    assert data['iat'] <= data['exp']


def test_token_is_signed():
    token = JWTTokenIssuer(jwt_secret=SECRET).issue('alice')
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, 'another-secret-that-is-also-long-enough!', algorithms=['HS256'])


def test_missing_secret_raises(monkeypatch):
    from payback.common.config import Config
    monkeypatch.setattr(Config, 'JWT_SECRET', None)
    issuer = JWTTokenIssuer()
    with pytest.raises(appexc.TokenIssueError, match='not configured'):
        issuer.issue('alice')


def test_signing_failure_raises_token_error():
    issuer = JWTTokenIssuer(jwt_secret=SECRET, algorithm='NOT-AN-ALGORITHM')
    with pytest.raises(appexc.TokenIssueError, match='Error generating token'):
        issuer.issue('alice')
