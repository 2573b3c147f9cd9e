import payback.domain.repositories as repos
import payback.domain.models as domain
import payback.domain.services as services
import payback.domain.exceptions as domexc
import payback.application.interfaces as iapp
import payback.application.exceptions as appexc
import payback.presentation.schemas as schemas
from payback.common.common import gather_bounded
from payback.infrastructure.telemetry.traces import TracerType

import logging

logger = logging.getLogger('app')

INVALID_CREDENTIALS = "Invalid credentials"


class AccountService:
    """Login and account mutations.

    Every mutation re-verifies the submitted username/password in the same call
    (verify-then-mutate). No session state is consulted.
    """

    def __init__(
        self,
        user_directory: repos.IUserDirectory,
        password_hasher: services.IPasswordHasherAsync,
        token_issuer: iapp.ITokenIssuer,
        password_policy: services.PasswordPolicy,
        *,
        dummy_hash: str,
        fanout_limit: int = 8,
    ) -> None:
        """`dummy_hash` is verified against when the username is unknown, so both failure
        paths cost exactly one verify. It must be built once per process with the same hasher cost."""
        self.users = user_directory
        self.hasher = password_hasher
        self.tokens = token_issuer
        self.policy = password_policy
        self.fanout_limit = fanout_limit
        self.dummy_hash = dummy_hash

    @staticmethod
    def _public(user: domain.User) -> schemas.PublicUserDTO:
        return schemas.PublicUserDTO(username=user.username, email=user.email, role_id=user.role_id)

    async def _verify_credentials(self, username: str, password: str) -> domain.User:
        user = await self.users.get_by_username(username) if username else None

        with TracerType.start_span('account_password_verifying'):
            if user is None:
                await self.hasher.verify(password, self.dummy_hash)
                verified = False
            else:
                verified = await self.hasher.verify(password, user.password_hash)

        if not verified:
            logger.info('[ACCOUNTS] Credential verification failed')
            raise appexc.CredentialsException(INVALID_CREDENTIALS)
        return user


    async def register(self, data: schemas.RegistrationModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        'Used by users to signup'
        user = await domain.User.create(
            username=data.username,
            email=data.email,
            password=data.password,
            role_id=data.role_id,
            hasher=self.hasher,
            policy=self.policy,
        )
        saved_user = await self.users.create(user)
        logger.info(f'[ACCOUNTS] Registered user id={saved_user.id}')
        return schemas.ResponseModel[schemas.PublicUserDTO](
            data=self._public(saved_user),
            message=f"{saved_user.username} was created!",
        )

    async def login(self, credentials: schemas.CredentialsModel) -> schemas.ResponseModel[schemas.LoginDTO]:
        user = await self._verify_credentials(credentials.username, credentials.password)
        token = self.tokens.issue(user.username)
        user = await self.users.update_field(user.id, "logged_in", True)
        logger.info(f'[ACCOUNTS] User id={user.id} logged in')
        return schemas.ResponseModel[schemas.LoginDTO](
            data=schemas.LoginDTO(
                username=user.username,
                email=user.email,
                role_id=user.role_id,
                token=token,
                logged_in=user.logged_in,
            ),
            message=f"{user.username} logged in successfully!",
        )

    async def logout(self, credentials: schemas.CredentialsModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        'Resets the logged_in flag. Issued tokens stay valid until they expire'
        user = await self._verify_credentials(credentials.username, credentials.password)
        user = await self.users.update_field(user.id, "logged_in", False)
        logger.info(f'[ACCOUNTS] User id={user.id} logged out')
        return schemas.ResponseModel[schemas.PublicUserDTO](
            data=self._public(user),
            message=f"{user.username} logged out!",
        )

    async def update_username(self, request: schemas.UsernameUpdateModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        new_username = request.new_username.strip()
        if not new_username:
            raise domexc.UserValueError("New username cannot be empty")

        user = await self._verify_credentials(request.username, request.password)
        user = await self.users.update_field(user.id, "username", new_username)
        logger.info(f'[ACCOUNTS] Username changed for user id={user.id}')
        return schemas.ResponseModel[schemas.PublicUserDTO](data=self._public(user), message="Username updated!")

    async def update_password(self, request: schemas.PasswordUpdateModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        user = await self._verify_credentials(request.username, request.password)
        new_hash = await domain.User.make_password_hash(request.new_password, self.hasher, self.policy)
        user = await self.users.update_field(user.id, "password_hash", new_hash)
        logger.info(f'[ACCOUNTS] Password changed for user id={user.id}')
        return schemas.ResponseModel[schemas.PublicUserDTO](data=self._public(user), message="Password updated!")

    async def update_role(self, request: schemas.RoleUpdateModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        user = await self._verify_credentials(request.username, request.password)
        user = await self.users.update_field(user.id, "role_id", request.role_id)
        logger.info(f'[ACCOUNTS] Role of user id={user.id} set to {user.role_id}')
        return schemas.ResponseModel[schemas.PublicUserDTO](data=self._public(user), message="User's role updated!")

    async def delete(self, credentials: schemas.CredentialsModel) -> schemas.ResponseModel[schemas.PublicUserDTO]:
        user = await self._verify_credentials(credentials.username, credentials.password)
        await self.users.delete(user.id)
        logger.info(f'[ACCOUNTS] Deleted user id={user.id}')
        return schemas.ResponseModel[schemas.PublicUserDTO](
            data=self._public(user),
            message=f"{user.username} was deleted!",
        )

    async def list_by_role(self, role_id: int) -> schemas.ResponseModel[schemas.UserListDTO]:
        users = await self.users.list_by_role(role_id)

        async def transform(user: domain.User) -> schemas.PublicUserDTO:
            return self._public(user)

        public_users = await gather_bounded(transform, users, limit=self.fanout_limit)
        return schemas.ResponseModel[schemas.UserListDTO](
            data=schemas.UserListDTO(users=public_users),
            message=f"Successfully fetched all users with role id {role_id}",
        )
