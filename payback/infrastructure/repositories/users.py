import payback.domain.repositories as repo
import payback.domain.models as domain
import payback.domain.exceptions as domexc
import payback.infrastructure.models as db
import payback.infrastructure.exceptions as infraexc

from sqlalchemy.ext.asyncio import AsyncSession
import sqlalchemy.exc as sqlexc
import sqlmodel as sqlm
import typing as t
import contextlib
import logging

logger = logging.getLogger('app.storage')

MYSQL_DUPLICATE_ENTRY = 1062


class SQLAUserDirectory(repo.IUserDirectory):
    """User directory implementation using SQLAlchemy AsyncSession.

    Every mutating method runs in its own transaction: the change is committed before
    the method returns, or rolled back if anything fails. Database-specific errors are
    converted into domain-level (duplicates) or opaque storage exceptions.
    """

    def __init__(self, session: AsyncSession):
        """Initialize the repository with an asynchronous SQLAlchemy session.

        Args:
            session (AsyncSession): An active SQLAlchemy async session.
        """
        self.session = session

    def _handle_integrity_error(self, error: sqlexc.IntegrityError) -> t.NoReturn:
        """Convert SQLAlchemy IntegrityError into a domain exception.

        Understands MySQL (error code 1062) and SQLite ("UNIQUE constraint failed") duplicate reports.

        Raises:
            UserAlreadyExists: If the error is caused by a duplicate username, email or id.
            UserIntegrityError: For other integrity violations.
        """
        args = getattr(error.orig, 'args', ())
        msg = str(error.orig)
        is_duplicate = 'UNIQUE constraint failed' in msg or (
            len(args) > 1 and args[0] == MYSQL_DUPLICATE_ENTRY
        )
        if is_duplicate:
            for field in ('username', 'email'):
                if field in msg:
                    raise domexc.UserAlreadyExists(f"Another user with this {field} already exists") from error
            raise domexc.UserAlreadyExists("Another user with this id already exists") from error
        raise domexc.UserIntegrityError("Action causes integrity constraint violation for User model. Cancelled", orig=error.orig)

    @contextlib.asynccontextmanager
    async def _transaction(self, action: str):
        """Commits on success. On failure rolls back and translates the error."""
        try:
            yield
            await self.session.commit()
        except sqlexc.IntegrityError as e:
            await self.session.rollback()
            self._handle_integrity_error(e)
        except sqlexc.SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f'[DB: USERS] {action} failed: {e!r}')
            raise infraexc.StorageError(f"Storage failure during '{action}'") from e
        except Exception:
            await self.session.rollback()
            raise

    @contextlib.asynccontextmanager
    async def _reading(self, action: str):
        try:
            yield
        except sqlexc.SQLAlchemyError as e:
            logger.error(f'[DB: USERS] {action} failed: {e!r}')
            raise infraexc.StorageError(f"Storage failure during '{action}'") from e

    async def _get_by_id(self, user_id: int) -> db.User | None:
        """Gets user by ID. For internal use, does not convert to domain level model."""
        return (await self.session.scalars(
            sqlm.select(db.User).where(db.User.id == user_id)
        )).one_or_none()


    async def get_by_id(self, user_id: int) -> domain.User | None:
        """Retrieve a user by their unique ID.

        Args:
            user_id (int): The ID of the user to retrieve.

        Returns:
            User | None: The user object if found, else None.
        """
        async with self._reading('get_by_id'):
            user = await self._get_by_id(user_id=user_id)
        return domain.User.model_validate(user, from_attributes=True) if user is not None else None


    async def get_by_username(self, username: str) -> domain.User | None:
        """Retrieve a user by their unique username.

        Args:
            username (str): The username to search for.

        Returns:
            User | None: The user object if found, else None.
        """
        if not username:
            return None
        async with self._reading('get_by_username'):
            user = (await self.session.scalars(
                sqlm.select(db.User).where(db.User.username == username)
            )).one_or_none()
        return domain.User.model_validate(user, from_attributes=True) if user is not None else None

    async def list_by_role(self, role_id: int) -> list[domain.User]:
        async with self._reading('list_by_role'):
            users_db = (await self.session.scalars(
                sqlm.select(db.User).where(db.User.role_id == role_id).order_by(db.User.id)
            )).all()
        return [domain.User.model_validate(u, from_attributes=True) for u in users_db]


    async def create(self, user: domain.User) -> domain.User:
        """Creates a given user in the database
        Args:
            user: User to save

        Returns:
            User: a created user.
        """
        row = db.User(**user.model_dump(exclude_none=True))
        async with self._transaction('create'):
            self.session.add(row)
            await self.session.flush()
            created = domain.User.model_validate(row, from_attributes=True)
        logger.info(f'[DB: USERS] Created user id={created.id}')
        return created

    async def update_field(self, user_id: int, field: repo.UserField, value: t.Any) -> domain.User:
        if field not in repo.UPDATABLE_FIELDS:
            raise ValueError(f"Field '{field}' can not be updated. Allowed: {sorted(repo.UPDATABLE_FIELDS)}")

        async with self._transaction(f'update_field:{field}'):
            await self.session.execute(
                sqlm.update(db.User)
                .where(db.User.id == user_id)
                .values({field: value})
                .execution_options(synchronize_session=False)
            )
            self.session.expire_all()
            updated = await self._get_by_id(user_id)
            if updated is None:
                raise infraexc.StorageError(f"User id={user_id} vanished before the update was applied")
            result = domain.User.model_validate(updated, from_attributes=True)
        logger.info(f'[DB: USERS] Updated {field} for user id={user_id}')
        return result

    async def delete(self, user_id: int) -> None:
        """Delete a user from database. Irreversible.

        Args:
            user_id: id of the user to delete

        Returns:
            None.
        """
        if user_id is None:
            raise ValueError('User id is missing. Fetch the object first, then pass its id here.')
        async with self._transaction('delete'):
            await self.session.execute(sqlm.delete(db.User).where(db.User.id == user_id))
        logger.info(f'[DB: USERS] Deleted user id={user_id}')
