"""Quickstart: register providers and resolve the top-level service.

Providers close over the container and ask it for their own dependencies,
so resolving ``user_service`` builds the whole chain.
"""

from __future__ import annotations

from diregistry import Container, ServiceDefinition


class Database:
    def __init__(self) -> None:
        self.host = "localhost"


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    container = Container()
    container.register("database", ServiceDefinition(Database))
    container.register(
        "user_repository",
        ServiceDefinition(lambda: UserRepository(container.get("database"))),
    )
    container.register(
        "user_service",
        ServiceDefinition(lambda: UserService(container.get("user_repository"))),
    )

    service = container.get("user_service")

    print(f"db_host={service.repository.database.host}")  # => db_host=localhost
    print(f"ids={','.join(container.get_all_service_ids())}")
    # => ids=database,user_repository,user_service


if __name__ == "__main__":
    main()
