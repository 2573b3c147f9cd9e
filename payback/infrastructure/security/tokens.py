import payback.application.interfaces as iapp
import payback.application.exceptions as appexc

from payback.infrastructure.telemetry.traces import TracerType
from payback.common.config import Config

import typing as t
import jwt, datetime as dt
import logging

logger = logging.getLogger('app')


class JWTTokenIssuer(iapp.ITokenIssuer):

    def __init__(
        self,
        *,
        jwt_secret: t.Optional[str] = None,
        expires_mins: t.Optional[int] = None,
        algorithm: t.Optional[str] = None,
    ):
        self.jwt_secret = jwt_secret or Config.JWT_SECRET
        self.expires_mins = expires_mins or Config.ACCESS_TOKEN_EXPIRE_MINUTES
        self.algorithm = algorithm or Config.ALGORITHM

        if not self.jwt_secret:
            logger.warning('[TOKENS] JWT secret is not configured. Logins will fail until it is set.')

    @TracerType.traced
    def issue(self, username: str) -> str:
        if not self.jwt_secret:
            raise appexc.TokenIssueError("Signing key is not configured")

        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "username": username,
            "iat": int(now.timestamp()),
            "exp": int((now + dt.timedelta(minutes=self.expires_mins)).timestamp()),
        }
        try:
            return jwt.encode(payload, self.jwt_secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise appexc.TokenIssueError("Error generating token") from e
