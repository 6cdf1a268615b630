"""
Named-route helpers and the bridge that exposes host helpers to the forum.

A route named `user` with path `/users/{user_id}` yields two helpers,
`user_path(user_id)` and `user_url(user_id)`. The forum engine sees its own
helpers first; host helpers with a different name are forwarded to the host.
"""
import uuid
from collections.abc import Mapping
from typing import Any, Callable, Iterable

import structlog
from starlette.routing import BaseRoute, Route

logger = structlog.get_logger()

HELPER_SUFFIXES = ("_path", "_url")

Helper = Callable[..., str]


def is_helper_name(name: str) -> bool:
    return name.endswith(HELPER_SUFFIXES)


def to_param(value: Any) -> Any:
    """Path parameter for `value`; model instances contribute their `id`."""
    if isinstance(value, (str, int, float, uuid.UUID)):
        return value
    return getattr(value, "id", value)


def _path_helper(route: Route, prefix: str) -> Helper:
    params = list(route.param_convertors)

    def helper(*args, **kwargs) -> str:
        if len(args) > len(params):
            raise TypeError(
                f"{route.name}_path takes {len(params)} positional arguments but {len(args)} were given"
            )
        path_params = {name: to_param(value) for name, value in zip(params, args)}
        path_params.update((name, to_param(value)) for name, value in kwargs.items())
        return prefix + str(route.url_path_for(route.name, **path_params))

    helper.__name__ = f"{route.name}_path"
    return helper


def _url_helper(path_helper: Helper, base_url: str, name: str) -> Helper:
    def helper(*args, **kwargs) -> str:
        return base_url.rstrip("/") + path_helper(*args, **kwargs)

    helper.__name__ = f"{name}_url"
    return helper


class RouteHelpers(Mapping):
    """
    Read-only mapping of helper name to helper for a set of routes.

    Only plain routes with a name produce helpers; mounts are skipped.
    When two routes share a name the first one wins, as in Starlette's
    own `url_path_for`.
    """

    def __init__(self, routes: Iterable[BaseRoute] = (), prefix: str = "", base_url: str = "http://localhost"):
        self.prefix = prefix.rstrip("/")
        self.base_url = base_url
        self._helpers: dict[str, Helper] = {}

        for route in routes:
            if not isinstance(route, Route) or not route.name:
                continue
            path_name = f"{route.name}_path"
            if path_name in self._helpers:
                continue
            path_helper = _path_helper(route, self.prefix)
            self._helpers[path_name] = path_helper
            self._helpers[f"{route.name}_url"] = _url_helper(path_helper, base_url, route.name)

    def __getitem__(self, name: str) -> Helper:
        return self._helpers[name]

    def __iter__(self):
        return iter(self._helpers)

    def __len__(self):
        return len(self._helpers)

    def __repr__(self):
        return f"<RouteHelpers({sorted(self._helpers)})>"


def include_routers(app, *routers) -> None:
    """
    `include_router` for each router, remembering them on `app.state`.

    Newer FastAPI releases keep included routers behind a single wrapper in
    `app.routes`, so helper generation reads the routers themselves.
    """
    for router in routers:
        app.include_router(router)
    app.state.included_routers = [*getattr(app.state, "included_routers", []), *routers]


def app_routes(app) -> list[BaseRoute]:
    """Routes declared on `app` directly plus those of its remembered routers."""
    routes = [route for route in app.routes if isinstance(route, Route)]
    for router in getattr(app.state, "included_routers", []):
        routes.extend(route for route in router.routes if isinstance(route, Route))
    return routes


def _forwarder(main_app: Mapping[str, Helper], name: str) -> Helper:
    def forward(*args, **kwargs):
        return main_app[name](*args, **kwargs)

    forward.__name__ = name
    return forward


def build_main_app_delegator(
    engine_helpers: Iterable[str],
    main_app: Mapping[str, Helper],
    log=None,
) -> dict[str, Helper]:
    """
    Forwarding helpers for every host helper the engine does not shadow.

    A host helper whose name the engine also defines is skipped with a
    warning; the engine's own helper keeps the name.

    Args:
        engine_helpers: Helper names (or a helper mapping) of the forum engine
        main_app: Host helper mapping; forwarders look names up here on each call
        log: structlog logger, defaults to this module's

    Returns:
        dict of helper name to forwarding function
    """
    log = log or logger
    engine_names = {name for name in engine_helpers if is_helper_name(name)}

    delegates: dict[str, Helper] = {}
    for name in main_app:
        if not is_helper_name(name):
            continue
        if name in engine_names:
            log.warning("route_helper_conflict_ignored", helper=name)
            continue
        delegates[name] = _forwarder(main_app, name)

    return delegates
