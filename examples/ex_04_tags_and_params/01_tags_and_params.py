"""Parameters, tags and the thread-safe composed registry."""

from __future__ import annotations

from diregistry import ComposedContainer, ParamDefinition, ServiceDefinition


class Handler:
    def __init__(self, name: str, level: str) -> None:
        self.name = name
        self.level = level


def main() -> None:
    registry = ComposedContainer.new(atomic=True)
    registry.register_param("log.level", ParamDefinition(lambda: "INFO"))

    for name, priority in (("file", 10), ("console", 100), ("syslog", 10)):
        registry.register(
            f"handler.{name}",
            ServiceDefinition(
                lambda name=name: Handler(name, registry.inner.get_param("log.level")),
            ),
        )
        registry.tag_service(f"handler.{name}", "log_handlers", priority)

    handlers = registry.get_by_tag("log_handlers")
    print([f"{handler.name}:{handler.level}" for handler in handlers])
    # => ['console:INFO', 'file:INFO', 'syslog:INFO']


if __name__ == "__main__":
    main()
