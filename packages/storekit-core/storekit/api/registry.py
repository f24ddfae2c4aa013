"""
Data API registry.

Data APIs are plain (sync or async) handlers exposed by name. The
registry is an ordinary object built at startup and handed to whatever
routes requests; there is no process-wide registry.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from storekit.api.params import Named, ParamSpec, Positional, to_param_spec
from storekit.db.database import Database
from storekit.errors import APINotFoundError, InvalidParamSpecError, UnauthorizedError
from storekit.models.context import RequestContext

logger = logging.getLogger(__name__)


@dataclass
class DataAPIContext:
    """
    What a data API handler receives as its first argument.

    Attributes:
        user: Authenticated user record, or None for anonymous calls
        db: Database adapter for this unit of work
        request: Correlation context for this unit of work
    """

    user: Optional[dict] = None
    db: Optional[Database] = None
    request: RequestContext = field(default_factory=RequestContext)


@dataclass(frozen=True)
class DataAPI:
    """
    A registered data API.

    Attributes:
        handler: Callable taking the context followed by the parsed params
        params: Parameter spec, or None to pass the body through untouched
        allow_anonymous: Whether the API may be called without a user
    """

    handler: Callable[..., Any]
    params: Optional[ParamSpec] = None
    allow_anonymous: bool = False

    @property
    def use_named_params(self) -> bool:
        return isinstance(self.params, Named)

    async def call(self, context: DataAPIContext, body: Any) -> Any:
        """Parse the body against the spec and call the handler."""
        args = self.params.parse(body) if self.params is not None else body

        if self.use_named_params or isinstance(args, dict):
            result = self.handler(context, args)
        else:
            result = self.handler(context, *(args or []))

        if inspect.isawaitable(result):
            result = await result
        return result


def _positional_arity(handler: Callable[..., Any]) -> Optional[int]:
    """Count required positional parameters; None if the handler takes *args."""
    count = 0
    for param in inspect.signature(handler).parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            if param.default is inspect.Parameter.empty:
                count += 1
    return count


def create_data_api(
    handler: Callable[..., Any],
    params: Any = None,
    allow_anonymous: bool = False,
) -> DataAPI:
    """
    Wrap a handler as a data API.

    Args:
        handler: Callable taking (context, *args) or (context, params_dict)
        params: Positional/Named spec, or a list/dict to build one from
        allow_anonymous: Whether the API may be called without a user

    Returns:
        DataAPI ready for registration

    Raises:
        InvalidParamSpecError: If the spec is malformed or the handler
            requires more positional arguments than the spec declares
    """
    if isinstance(handler, DataAPI):
        raise InvalidParamSpecError("handler seems to be already an API")

    spec = to_param_spec(params)

    if not isinstance(spec, Named):
        declared = len(spec) if isinstance(spec, Positional) else 0
        arity = _positional_arity(handler)
        # The context takes the first slot
        if arity is not None and arity > declared + 1:
            raise InvalidParamSpecError(
                f"Invalid params length, handler length: {arity}, params length: {declared}"
            )

    return DataAPI(handler=handler, params=spec, allow_anonymous=allow_anonymous)


class APIRegistry:
    """Name to DataAPI mapping."""

    def __init__(self):
        self._apis: Dict[str, DataAPI] = {}

    def register(self, name: str, api: DataAPI) -> None:
        """
        Register an API under a name.

        Raises:
            ValueError: If the name is already taken
        """
        if name in self._apis:
            raise ValueError(f"api {name} already registered")
        self._apis[name] = api
        logger.debug(f"Registered data API: {name}")

    def get(self, name: str) -> DataAPI:
        """
        Look up an API by name.

        Raises:
            APINotFoundError: If no API has that name
        """
        api = self._apis.get(name)
        if api is None:
            raise APINotFoundError(name)
        return api

    def names(self) -> List[str]:
        return sorted(self._apis)

    def __contains__(self, name: str) -> bool:
        return name in self._apis

    def __len__(self) -> int:
        return len(self._apis)

    async def invoke(self, name: str, context: DataAPIContext, body: Any = None) -> Any:
        """
        Call a registered API.

        Args:
            name: Registered API name
            context: Caller context (user, db, request)
            body: Raw params, a list or dict depending on the API's spec

        Returns:
            Whatever the handler returns

        Raises:
            APINotFoundError: If no API has that name
            UnauthorizedError: If the API needs a user and none is set
            InvalidParamsError: If the body does not fit the spec
        """
        api = self.get(name)

        if not api.allow_anonymous and context.user is None:
            raise UnauthorizedError()

        logger.info(f"[{context.request.request_id}] Calling data API: {name}")
        return await api.call(context, body)
