import sqlmodel as sqlm


class User(sqlm.SQLModel, table=True):
    __tablename__ = 'users'
    id: int | None = sqlm.Field(default=None, primary_key=True, description='Integer user identifier')
    username: str | None = sqlm.Field(default=None, unique=True, max_length=64, description='A unique username used for logging in')
    email: str | None = sqlm.Field(default=None, unique=True, max_length=255, description='A unique contact email')
    password_hash: str = sqlm.Field(max_length=128, description='A hashed password. Never plaintext')
    role_id: int = sqlm.Field(default=1, index=True, description='Role identifier. Role table is not owned by this service')
    logged_in: bool = sqlm.Field(default=False, description='Set on login, reset on logout')
