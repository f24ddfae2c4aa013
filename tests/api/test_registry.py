"""
Tests for the data API registry.
"""

import pytest

from storekit.api.params import Named, Positional
from storekit.api.registry import APIRegistry, DataAPI, DataAPIContext, create_data_api
from storekit.errors import APINotFoundError, InvalidParamSpecError, UnauthorizedError


class Quantity:
    def __init__(self, value):
        self.value = value

    @classmethod
    def from_value(cls, value):
        return cls(int(value))


@pytest.fixture
def user_context():
    return DataAPIContext(user={"id": 1, "name": "Alice"})


class TestCreateDataAPI:
    """Tests for create_data_api()."""

    def test_positional_spec_from_list(self):
        api = create_data_api(lambda ctx, qty: qty, [Quantity])

        assert isinstance(api.params, Positional)
        assert api.use_named_params is False
        assert api.allow_anonymous is False

    def test_named_spec_from_dict(self):
        api = create_data_api(lambda ctx, params: params, {"qty": Quantity}, allow_anonymous=True)

        assert isinstance(api.params, Named)
        assert api.use_named_params is True
        assert api.allow_anonymous is True

    def test_handler_needs_more_args_than_declared(self):
        """Test handlers requiring undeclared positional args are rejected."""
        def handler(ctx, a, b):
            return a, b

        with pytest.raises(InvalidParamSpecError, match="Invalid params length"):
            create_data_api(handler, [Quantity])

    def test_optional_and_var_args_are_accepted(self):
        def with_default(ctx, a, b=None):
            return a

        def with_varargs(ctx, *args):
            return args

        create_data_api(with_default, [Quantity])
        create_data_api(with_varargs)

    def test_wrapping_an_api_twice_rejected(self):
        api = create_data_api(lambda ctx: None)

        with pytest.raises(InvalidParamSpecError, match="already an API"):
            create_data_api(api)

    def test_invalid_transformer_rejected_at_registration(self):
        with pytest.raises(InvalidParamSpecError):
            create_data_api(lambda ctx, x: x, [object()])


class TestAPIRegistry:
    """Tests for APIRegistry."""

    def test_register_and_get(self):
        registry = APIRegistry()
        api = create_data_api(lambda ctx: "ok")

        registry.register("ping", api)

        assert registry.get("ping") is api
        assert "ping" in registry
        assert len(registry) == 1
        assert registry.names() == ["ping"]

    def test_duplicate_name_rejected(self):
        registry = APIRegistry()
        registry.register("ping", create_data_api(lambda ctx: "ok"))

        with pytest.raises(ValueError):
            registry.register("ping", create_data_api(lambda ctx: "again"))

    def test_registries_are_independent(self):
        """Test there is no shared global registry."""
        first, second = APIRegistry(), APIRegistry()
        first.register("ping", create_data_api(lambda ctx: "ok"))

        assert "ping" not in second

    def test_unknown_api(self):
        with pytest.raises(APINotFoundError) as exc_info:
            APIRegistry().get("missing")

        assert exc_info.value.status_code == 404
        assert "missing" in str(exc_info.value)


class TestInvoke:
    """Tests for APIRegistry.invoke()."""

    @pytest.mark.asyncio
    async def test_positional_call(self, user_context):
        """Test positional params are transformed and spread."""
        registry = APIRegistry()

        async def order(ctx, item, qty):
            return {"user": ctx.user["name"], "item": item, "qty": qty.value}

        registry.register("order", create_data_api(order, ["string", Quantity]))

        result = await registry.invoke("order", user_context, ["tea", "3"])

        assert result == {"user": "Alice", "item": "tea", "qty": 3}

    @pytest.mark.asyncio
    async def test_named_call(self, user_context):
        """Test named params are passed as one dict."""
        registry = APIRegistry()

        def order(ctx, params):
            return params["qty"].value * 2

        registry.register("order", create_data_api(order, {"qty": Quantity}))

        assert await registry.invoke("order", user_context, {"qty": "4"}) == 8

    @pytest.mark.asyncio
    async def test_call_without_spec(self, user_context):
        registry = APIRegistry()
        registry.register("echo", create_data_api(lambda ctx, *args: list(args)))

        assert await registry.invoke("echo", user_context, [1, "two"]) == [1, "two"]

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self):
        """Test APIs needing a user reject anonymous callers."""
        registry = APIRegistry()
        registry.register("private", create_data_api(lambda ctx: "secret"))

        with pytest.raises(UnauthorizedError) as exc_info:
            await registry.invoke("private", DataAPIContext(), [])

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_anonymous_allowed(self):
        registry = APIRegistry()
        registry.register("public", create_data_api(lambda ctx: "hello", allow_anonymous=True))

        assert await registry.invoke("public", DataAPIContext(), []) == "hello"

    @pytest.mark.asyncio
    async def test_unknown_api(self, user_context):
        with pytest.raises(APINotFoundError):
            await APIRegistry().invoke("missing", user_context, [])

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self, user_context):
        registry = APIRegistry()

        async def broken(ctx):
            raise RuntimeError("boom")

        registry.register("broken", create_data_api(broken))

        with pytest.raises(RuntimeError, match="boom"):
            await registry.invoke("broken", user_context)


def test_data_api_is_immutable():
    api = DataAPI(handler=lambda ctx: None)

    with pytest.raises(AttributeError):
        api.allow_anonymous = True
