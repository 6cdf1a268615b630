"""
The forum engine as a mounted sub-application.

The host builds a `ForumEngine` from its `ForumConfig`, mounts it with
`install()` and calls `prepare()` whenever its own routes change.
"""
from collections import ChainMap
from typing import Any

import structlog
from fastapi import FastAPI, Request

from townsquare.forum.config import ForumConfig
from townsquare.forum.routes import router
from townsquare.forum.url_helpers import RouteHelpers, app_routes, build_main_app_delegator, include_routers

logger = structlog.get_logger()


class ForumEngine:
    """Forum sub-application plus the helpers it renders links with."""

    def __init__(self, config: ForumConfig, mount_path: str = "/forum", base_url: str = "http://localhost"):
        self.config = config
        self.mount_path = mount_path.rstrip("/")
        self.base_url = base_url

        self.app = FastAPI(title="Forum", openapi_url=None, docs_url=None, redoc_url=None)
        self.app.state.forum_engine = self
        include_routers(self.app, router)

        self.main_app = RouteHelpers(base_url=base_url)
        self.main_app_delegates: dict = {}
        self.helpers = ChainMap(self.engine_helpers())

    def route_helpers(self) -> RouteHelpers:
        return RouteHelpers(app_routes(self.app), prefix=self.mount_path, base_url=self.base_url)

    def view_helpers(self) -> dict:
        """Helpers views get beyond the engine's routes."""
        return {
            "user_path": lambda user: self.config.user_path(user, self.main_app),
        }

    def engine_helpers(self) -> dict:
        return {**self.route_helpers(), **self.view_helpers()}

    def install(self, host_app: FastAPI) -> None:
        host_app.mount(self.mount_path, self.app, name="forum")
        host_app.state.forum_engine = self

    def prepare(self, host_app: FastAPI) -> None:
        """
        Rebuild the host helper bridge from the host's current routes.

        Engine helpers win over host helpers of the same name.
        """
        self.main_app = RouteHelpers(app_routes(host_app), base_url=self.base_url)
        engine_helpers = self.engine_helpers()
        self.main_app_delegates = build_main_app_delegator(engine_helpers, self.main_app, log=logger)
        self.helpers = ChainMap(engine_helpers, self.main_app_delegates)

        logger.info(
            "forum_helpers_prepared",
            engine_helpers=len(engine_helpers),
            forwarded_helpers=len(self.main_app_delegates),
        )

    async def current_user(self, request: Request) -> Any:
        return await self.config.current_user(request)
