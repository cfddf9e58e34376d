import copy
import os
import yaml
from dotenv import load_dotenv
from string import Template
from stations_api.logger import CustomLogger

console = CustomLogger()

DEFAULTS = {
    "database": {
        "url": None,
        "pool_size": 10,
        "pool_timeout": None,
        "echo": False,
        "create_tables": True,
    },
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
    },
    "auth": {
        "header": "Authorization",
    },
    "logging": {
        "level": "INFO",
        "dir": None,
    },
}


ASYNC_SCHEMES = {
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
}


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Service settings read from an optional YAML file plus the environment.

    ``${VAR}`` placeholders in the file are expanded from the environment before
    parsing. ``DATABASE_URL`` and ``PORT`` take precedence over the file.
    """

    def __init__(self, filepath=None, data=None):
        load_dotenv()
        filepath = filepath or os.getenv("CONFIG_FILE_PATH", "config.yaml")

        if data is None:
            data = self.__read(filepath)

        self.__data = _merge(DEFAULTS, data)
        self.__apply_environment()
        self.__validate()

    @staticmethod
    def __read(filepath) -> dict:
        if not os.path.isfile(filepath):
            console.debug(f"Config file '{filepath}' not found, using environment and defaults.")
            return {}

        try:
            with open(filepath, "r") as f:
                content = Template(f.read()).substitute(os.environ)
        except KeyError as e:
            console.error(f"Config file '{filepath}' references undefined variable {e}")
            raise RuntimeError(f"Undefined environment variable {e} in '{filepath}'") from e
        except ValueError as e:
            console.error(f"Invalid placeholder in config file '{filepath}': {e}")
            raise RuntimeError(f"Invalid placeholder in '{filepath}': {e}") from e

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            console.error(f"Error reading config: {e}")
            raise RuntimeError(f"Error reading config: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise RuntimeError(f"Config file '{filepath}' must contain a mapping at the top level.")
        return data

    def __apply_environment(self):
        database_url = os.getenv("DATABASE_URL")
        if database_url:
            self.__data["database"]["url"] = database_url

        port = os.getenv("PORT")
        if port:
            try:
                self.__data["server"]["port"] = int(port)
            except ValueError as e:
                raise RuntimeError(f"PORT must be an integer, got '{port}'") from e

    def __validate(self):
        url = self.__data["database"].get("url")
        if not url:
            console.error("No database connection URL configured (database.url or DATABASE_URL).")
            raise RuntimeError("Missing database connection URL")

        # Hosting providers hand out plain postgres:// URLs; the engine needs the async driver
        scheme, sep, rest = str(url).partition("://")
        if sep and scheme in ASYNC_SCHEMES:
            self.__data["database"]["url"] = f"{ASYNC_SCHEMES[scheme]}://{rest}"

        pool_size = self.__data["database"].get("pool_size")
        if not isinstance(pool_size, int) or pool_size < 1:
            raise RuntimeError(f"database.pool_size must be a positive integer, got {pool_size!r}")

        # None queues for a free connection without limit
        pool_timeout = self.__data["database"].get("pool_timeout")
        if pool_timeout is not None and (
            isinstance(pool_timeout, bool) or not isinstance(pool_timeout, (int, float)) or pool_timeout <= 0
        ):
            raise RuntimeError(f"database.pool_timeout must be a positive number or null, got {pool_timeout!r}")

    @property
    def database(self):
        return self.__data["database"]

    @property
    def server(self):
        return self.__data["server"]

    @property
    def auth(self):
        return self.__data["auth"]

    @property
    def logging(self):
        return self.__data["logging"]
