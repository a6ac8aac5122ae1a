import pytest

from techcart.database.redis_real import RedisSessionStore
from techcart.database.session_store import FileSessionStore, InMemorySessionStore
from techcart.dependencies import build_client, build_session_store, build_storefront
from techcart.integrations.clients.mocks.storefront_api import MockStorefrontClient
from techcart.integrations.clients.real_http.storefront_api import StorefrontAPIClient
from techcart.integrations.contracts.catalog import AuthForm
from techcart.integrations.contracts.results import ActionResult, ResultStatus
from techcart.storefront.auth import AuthMode
from techcart.storefront.notifications import LOGIN_REQUIRED, describe
from techcart.utils.config_loader import StorefrontConfig


def test_session_store_selection(tmp_path):
    assert isinstance(build_session_store(StorefrontConfig()), InMemorySessionStore)
    assert isinstance(build_session_store(StorefrontConfig(session_file=str(tmp_path / "s.json"))), FileSessionStore)
    assert isinstance(build_session_store(StorefrontConfig(redis_url="redis://localhost:6379/0")), RedisSessionStore)


def test_client_selection():
    real = build_client(StorefrontConfig(api_base_url="https://api.shop.test/", timeout_seconds=3))
    assert isinstance(real, StorefrontAPIClient)
    assert real.base_url == "https://api.shop.test"
    assert real.timeout_seconds == 3
    assert isinstance(build_client(StorefrontConfig(use_mock_backend=True)), MockStorefrontClient)


@pytest.mark.asyncio
async def test_full_session_against_mock_backend():
    shop = build_storefront(StorefrontConfig(use_mock_backend=True))

    state = await shop.catalog.initialize()
    assert len(state.categories) == 3
    assert len(state.products) == 5

    state = await shop.catalog.set_category("gpu")
    state = await shop.catalog.search("rtx")
    assert [p.name for p in state.products] == ["GeForce RTX 4070"]
    product = state.products[0]

    result = await shop.cart.add_to_cart(product)
    assert result.status is ResultStatus.UNAUTHENTICATED
    assert describe("add_to_cart", result).message == LOGIN_REQUIRED

    form = AuthForm(username="dana", email="dana@example.com", password="pw")
    result = await shop.auth.login(form.username, form.password)
    assert result == ActionResult.failure("Incorrect credentials")

    shop.auth.switch_mode(AuthMode.REGISTER)
    assert (await shop.auth.submit(form)).ok
    assert shop.auth.mode is AuthMode.LOGIN
    assert shop.session_store.get() is None

    assert (await shop.auth.submit(form)).ok
    assert shop.session_store.get()

    result = await shop.cart.add_to_cart(product)
    assert describe("add_to_cart", result).message == "Added to cart"
    assert shop.client.cart_items == [{"username": "dana", "product_id": 3, "quantity": 1}]


def test_describe_failure_uses_detail_or_fallback():
    note = describe("login", ActionResult.failure("Incorrect credentials"))
    assert (note.level, note.message) == ("error", "Incorrect credentials")

    note = describe("register", ActionResult(ResultStatus.FAILURE))
    assert note.message == "Registration failed"

    assert describe("register", ActionResult.success()).message == "Registered! Now login."
