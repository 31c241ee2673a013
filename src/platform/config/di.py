"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.library.driven_adapter.clock.system_clock import SystemClock


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Time source for date rules; tests override with a fixed clock
    clock = providers.Singleton(SystemClock)


container = Container()


def setup() -> None:
    container.config_service()
    container.clock()


def cleanup() -> None:
    container.reset_singletons()
