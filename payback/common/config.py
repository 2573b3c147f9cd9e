import os


class Config():
    #Basic app settings
    APP_NAME = 'payback' #Is gonna match the app root
    GIT_COMMIT = os.getenv("GIT_COMMIT", "[commit hash unknown]")
    MODE = os.getenv("MODE", "Local build")
    JSON_LOGS = int(os.getenv("JSON_LOGS", "0"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))
    WORKERS = int(os.getenv("WORKERS", "1"))

    #Telemetry
    OTEL_ENABLED = int(os.getenv("OTEL_ENABLED", "0"))
    OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", APP_NAME)
    OTEL_GRPC_ENDPOINT = os.getenv("OTEL_GRPC_ENDPOINT", "http://otel-collector:4317")

    #Security settings
    JWT_SECRET = os.getenv("JWT_SECRET")
    ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "240"))
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

    #Password policy. Static, never changed at runtime
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_MAX_BYTES = 72 #bcrypt ignores/refuses anything longer
    PASSWORD_REQUIRE_LOWER = True
    PASSWORD_REQUIRE_UPPER = True
    PASSWORD_REQUIRE_DIGIT = True
    PASSWORD_REQUIRE_SPECIAL = True

    #Accounts
    DEFAULT_ROLE_ID = int(os.getenv("DEFAULT_ROLE_ID", "1"))
    FANOUT_WORKERS = int(os.getenv("FANOUT_WORKERS", "8")) #Max concurrent per-record transforms

    #MySQL Template
    #DB_USER = os.getenv("MYSQL_USER")
    #DB_PASS = os.getenv("MYSQL_PASSWORD")
    #DB_NAME = os.getenv("MYSQL_DATABASE")
    #DB_HOST = 'db'
    #DB_PORT = 3306
    #DB_URL = f"mysql+aiomysql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"

    #SQLite (local builds and tests)
    DB_URL = os.getenv("DB_URL", "sqlite+aiosqlite:///./payback.db")

    #DB Common
    DB_WAIT_INTERVAL_SECONDS = 10  #seconds
    DB_WAIT_MAX_RETRIES = 10
    DB_KWARGS = {
        'echo': False,
    }
