from abc import abstractmethod, ABC
import payback.domain.models.users as domain
import typing as t

UserField = t.Literal["username", "password_hash", "role_id", "logged_in"]
UPDATABLE_FIELDS: frozenset[str] = frozenset(t.get_args(UserField))


class IUserDirectory(ABC):
    """Abstract base for user storage. Specific implementations must inherit this base class.

    Every mutating call is atomic on its own. Storage failures surface as StorageError,
    uniqueness violations as UserAlreadyExists. Implementations never retry.
    """

    @abstractmethod
    async def get_by_id(self, user_id: int) -> domain.User | None: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> domain.User | None: ...

    @abstractmethod
    async def list_by_role(self, role_id: int) -> list[domain.User]: ...

    @abstractmethod
    async def create(self, user: domain.User) -> domain.User: ...

    @abstractmethod
    async def update_field(self, user_id: int, field: UserField, value: t.Any) -> domain.User:
        '''Updates a single column of the user with given id and returns the stored record'''

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        '''Hard delete'''
