import pytest
import sqlalchemy.exc as sqlexc
import payback.domain.models as dmod
import payback.domain.exceptions as domexc
import payback.infrastructure.exceptions as infraexc
import payback.infrastructure.repositories as repos


def make_user(i: int, role_id: int = 1, **overrides) -> dmod.User:
    data = dict(
        username=f'user{i}',
        email=f'user{i}@example.com',
        password_hash='$2b$04$abcdefghijklmnopqrstuuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ01',
        role_id=role_id,
    )
    data.update(overrides)
    return dmod.User(**data)


@pytest.mark.asyncio
async def test_user_repo_create_and_get(user_directory: repos.SQLAUserDirectory):
    created = await user_directory.create(make_user(1))
    assert created.id is not None
    assert created.logged_in is False

    by_id = await user_directory.get_by_id(created.id)
    by_name = await user_directory.get_by_username('user1')
    assert by_id == by_name == created

    assert await user_directory.get_by_id(created.id + 100) is None
    assert await user_directory.get_by_username('nobody') is None
    assert await user_directory.get_by_username('') is None


@pytest.mark.asyncio
async def test_user_repo_create_without_username(user_directory: repos.SQLAUserDirectory):
    created = await user_directory.create(make_user(1, username=None))
    assert created.username is None
    assert created.email == 'user1@example.com'


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        (dict(email='other@example.com'), 'username'),
        (dict(username='other'), 'email'),
    ],
)
async def test_user_repo_duplicate_handling(user_directory: repos.SQLAUserDirectory, overrides, field):
    await user_directory.create(make_user(1))
    with pytest.raises(domexc.UserAlreadyExists, match=field):
        await user_directory.create(make_user(1, **overrides))

    #session stays usable after rollback
    assert (await user_directory.get_by_username('user1')) is not None
    assert len(await user_directory.list_by_role(1)) == 1


def test_user_repo_integrity_error_translation():
    directory = repos.SQLAUserDirectory(session=None)

    class FakeDriverError(Exception):
        pass

    mysql_dup = sqlexc.IntegrityError('INSERT', {}, FakeDriverError(1062, "Duplicate entry 'a' for key 'users.username'"))
    with pytest.raises(domexc.UserAlreadyExists, match='username'):
        directory._handle_integrity_error(mysql_dup)

    other = sqlexc.IntegrityError('INSERT', {}, FakeDriverError(1048, "Column 'password_hash' cannot be null"))
    with pytest.raises(domexc.UserIntegrityError) as e:
        directory._handle_integrity_error(other)
    assert not isinstance(e.value, domexc.UserAlreadyExists)
    assert e.value.orig is other.orig


@pytest.mark.asyncio
async def test_user_repo_update_field(user_directory: repos.SQLAUserDirectory):
    user = await user_directory.create(make_user(1))

    updated = await user_directory.update_field(user.id, 'logged_in', True)
    assert updated.logged_in is True
    updated = await user_directory.update_field(user.id, 'username', 'renamed')
    assert updated.username == 'renamed'
    updated = await user_directory.update_field(user.id, 'role_id', 5)
    assert updated.role_id == 5

    stored = await user_directory.get_by_id(user.id)
    assert stored.username == 'renamed'
    assert stored.role_id == 5
    assert stored.logged_in is True
    assert await user_directory.get_by_username('user1') is None


@pytest.mark.asyncio
async def test_user_repo_update_field_duplicate_username(user_directory: repos.SQLAUserDirectory):
    first = await user_directory.create(make_user(1))
    await user_directory.create(make_user(2))
    with pytest.raises(domexc.UserAlreadyExists):
        await user_directory.update_field(first.id, 'username', 'user2')
    assert (await user_directory.get_by_id(first.id)).username == 'user1'


@pytest.mark.asyncio
async def test_user_repo_update_field_rejects(user_directory: repos.SQLAUserDirectory):
    user = await user_directory.create(make_user(1))
    with pytest.raises(ValueError):
        await user_directory.update_field(user.id, 'email', 'x@example.com')
    with pytest.raises(infraexc.StorageError):
        await user_directory.update_field(user.id + 100, 'role_id', 2)


@pytest.mark.asyncio
async def test_user_repo_delete(user_directory: repos.SQLAUserDirectory):
    user = await user_directory.create(make_user(1))
    await user_directory.delete(user.id)
    assert await user_directory.get_by_id(user.id) is None

    with pytest.raises(ValueError):
        await user_directory.delete(None)


@pytest.mark.asyncio
async def test_user_repo_list_by_role(user_directory: repos.SQLAUserDirectory):
    for i in range(3):
        await user_directory.create(make_user(i, role_id=2))
    await user_directory.create(make_user(10, role_id=3))

    users = await user_directory.list_by_role(2)
    assert [u.username for u in users] == ['user0', 'user1', 'user2']
    assert await user_directory.list_by_role(99) == []


@pytest.mark.asyncio
async def test_user_repo_wraps_driver_errors(user_directory: repos.SQLAUserDirectory, mocker):
    mocker.patch.object(user_directory.session, 'scalars', side_effect=sqlexc.OperationalError('SELECT', {}, Exception('gone')))
    with pytest.raises(infraexc.StorageError):
        await user_directory.list_by_role(1)
