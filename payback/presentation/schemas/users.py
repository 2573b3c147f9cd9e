import typing as t
import pydantic as p
from pydantic.alias_generators import to_camel
from payback.common.config import Config


class CamelModel(p.BaseModel):
    '''Accepts both camelCase (wire) and snake_case (python) names. Serializes to camelCase'''
    model_config = p.ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @p.field_validator('*', mode='after')
    @classmethod
    def utf8_encodable(cls, v):
        #JSON escapes can smuggle lone surrogates that neither bcrypt nor the DB driver accept
        if isinstance(v, str):
            try:
                v.encode('utf-8')
            except UnicodeEncodeError:
                raise ValueError('must be valid UTF-8 text') from None
        return v


########################################
#               Requests               #
########################################

class RegistrationModel(CamelModel):
    username: str|None = p.Field(default=None, max_length=64, description='A unique username used for logging in')
    email: str|None = p.Field(default=None, max_length=255, description='A unique contact email')
    password: str = p.Field(description='Plaintext password. Checked against the password policy, stored hashed')
    role_id: int = p.Field(default=Config.DEFAULT_ROLE_ID, ge=0, description='Role identifier')

    @p.field_validator('username', 'email', mode='before')
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CredentialsModel(CamelModel):
    username: str = p.Field(description='Account username')
    password: str = p.Field(description='Current account password')


class UsernameUpdateModel(CredentialsModel):
    new_username: str = p.Field(default="", max_length=64, description="New username")


class PasswordUpdateModel(CredentialsModel):
    new_password: str = p.Field(default="", description="New password. Checked against the password policy")


class RoleUpdateModel(CredentialsModel):
    role_id: int = p.Field(ge=0, description='New role identifier')


########################################
#               Responses              #
########################################

class PublicUserDTO(CamelModel):
    '''The only user fields ever sent back to a client'''
    username: str|None
    email: str|None
    role_id: int


class LoginDTO(PublicUserDTO):
    token: str
    logged_in: bool


class UserListDTO(CamelModel):
    users: list[PublicUserDTO]


DataT = t.TypeVar("DataT")

class ResponseModel(p.BaseModel, t.Generic[DataT]):
    data: DataT | None = None
    message: str


class ErrorModel(p.BaseModel):
    message: str
