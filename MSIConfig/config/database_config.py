from typing import List


class DatabaseConfig:
    def __init__(
            self,
            host: str = "localhost",
            database: str = "sm",
            user: str = "sm",
            password: str = "",
            port: int = 5432,
            pool_size: int = 10,
            idle_timeout: int = 30,
            search_path: str = "knex,public",
    ):
        """
        Configuration for the pooled database client.

        Parameters:
        ----------
        host, port, database, user, password :
            Connection credentials of the PostgreSQL server.

        pool_size : int
            Maximum number of connections kept by the pool (default: 10).

        idle_timeout : int
            Seconds after which a pooled connection is replaced on checkout (default: 30).

        search_path : str
            Comma separated schema search path set on every connection (default: knex,public).
        """
        self.host = host
        self.database = database
        self.user = user
        self.password = password
        self.port = port
        self.pool_size = pool_size
        self.idle_timeout = idle_timeout
        self.search_path = search_path

    @property
    def schemas(self) -> List[str]:
        return [schema.strip() for schema in self.search_path.split(",") if schema.strip()]

    @classmethod
    def from_parser(cls, parser) -> "DatabaseConfig":
        return cls(
            host=parser.get("db_host"),
            database=parser.get("db_database"),
            user=parser.get("db_user"),
            password=parser.get("db_password"),
            port=parser.get("db_port"),
            pool_size=parser.get("db_pool_size"),
            idle_timeout=parser.get("db_idle_timeout"),
            search_path=parser.get("db_search_path"),
        )
