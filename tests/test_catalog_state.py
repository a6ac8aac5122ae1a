import asyncio
import random
from decimal import Decimal

import httpx
import pytest

from techcart.integrations.contracts.catalog import Category, Product
from techcart.storefront.catalog_state import CatalogStateController, LoadStatus


def make_product(pid, name, category, price="10.00"):
    return Product(id=pid, name=name, category=category, price=Decimal(price))


CATEGORIES = [Category(slug="cpu", name="CPUs"), Category(slug="gpu", name="GPUs")]
RESULTS = {
    "": [make_product(1, "Ryzen 7", "cpu"), make_product(2, "RTX 4070", "gpu")],
    "cpu": [make_product(1, "Ryzen 7", "cpu")],
    "gpu": [make_product(2, "RTX 4070", "gpu")],
}


class DummyCatalogClient:
    """Answers immediately from RESULTS, keyed by category param."""

    def __init__(self, fail_categories=False):
        self.product_calls = []
        self.category_calls = 0
        self.fail_categories = fail_categories

    async def list_categories(self):
        self.category_calls += 1
        if self.fail_categories:
            raise httpx.ConnectError("connection refused")
        return list(CATEGORIES)

    async def list_products(self, params):
        self.product_calls.append(dict(params))
        return list(RESULTS[params.get("category", "")])


class GatedCatalogClient:
    """Each product request waits until the test releases it."""

    def __init__(self, gate_categories=False):
        self.product_calls = []
        self.category_calls = 0
        self._gates = []
        self._categories_gate = None
        self.gate_categories = gate_categories

    async def list_categories(self):
        self.category_calls += 1
        if self.gate_categories:
            self._categories_gate = asyncio.get_running_loop().create_future()
            await self._categories_gate
        return list(CATEGORIES)

    def release_categories(self):
        self._categories_gate.set_result(None)

    async def list_products(self, params):
        gate = asyncio.get_running_loop().create_future()
        self.product_calls.append(dict(params))
        self._gates.append(gate)
        outcome = await gate
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def release(self, index, outcome=None):
        if outcome is None:
            outcome = list(RESULTS[self.product_calls[index].get("category", "")])
        self._gates[index].set_result(outcome)


async def wait_for_calls(client, count):
    for _ in range(100):
        if len(client.product_calls) >= count:
            return
        await asyncio.sleep(0)
    raise AssertionError(f"expected {count} product calls, saw {len(client.product_calls)}")


@pytest.mark.asyncio
async def test_initialize_loads_categories_then_unfiltered_products():
    client = DummyCatalogClient()
    catalog = CatalogStateController(client)
    assert catalog.state.status is LoadStatus.IDLE

    state = await catalog.initialize()

    assert client.category_calls == 1
    assert client.product_calls == [{}]
    assert state.status is LoadStatus.READY
    assert [c.slug for c in state.categories] == ["cpu", "gpu"]
    assert len(state.products) == 2
    assert state.error is False


@pytest.mark.asyncio
async def test_initialize_fetches_categories_only_once():
    client = DummyCatalogClient()
    catalog = CatalogStateController(client)

    await catalog.initialize()
    await catalog.initialize()

    assert client.category_calls == 1
    assert len(client.product_calls) == 2


@pytest.mark.asyncio
async def test_category_failure_is_flagged_and_products_still_load():
    client = DummyCatalogClient(fail_categories=True)
    catalog = CatalogStateController(client)

    state = await catalog.initialize()

    assert state.categories == ()
    assert state.categories_error is True
    assert state.status is LoadStatus.READY
    assert len(state.products) == 2

    # Next initialize retries the reference list
    await catalog.initialize()
    assert client.category_calls == 2


@pytest.mark.asyncio
async def test_term_and_category_are_sent_as_params():
    client = DummyCatalogClient()
    catalog = CatalogStateController(client)

    await catalog.set_term("Ryzen")
    state = await catalog.set_category("cpu")

    assert client.product_calls == [{"q": "Ryzen"}, {"q": "Ryzen", "category": "cpu"}]
    assert [p.name for p in state.products] == ["Ryzen 7"]
    assert state.query.term == "Ryzen"
    assert state.query.category_slug == "cpu"


@pytest.mark.asyncio
@pytest.mark.parametrize("slug", ["", "all"])
async def test_all_category_and_blank_term_are_omitted(slug):
    client = DummyCatalogClient()
    catalog = CatalogStateController(client)

    await catalog.set_term("   ")
    await catalog.set_category(slug)

    assert client.product_calls == [{}, {}]


@pytest.mark.asyncio
async def test_each_operation_issues_exactly_one_product_request():
    client = DummyCatalogClient()
    catalog = CatalogStateController(client)

    await catalog.set_term("rtx")
    await catalog.set_category("gpu")
    await catalog.refresh()
    await catalog.search("ryzen")

    assert len(client.product_calls) == 4
    assert catalog.generation == 4


@pytest.mark.asyncio
async def test_late_gpu_response_is_ignored_after_cpu_query():
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    gpu = asyncio.create_task(catalog.set_category("gpu"))
    cpu = asyncio.create_task(catalog.set_category("cpu"))
    await wait_for_calls(client, 2)
    assert catalog.is_loading

    client.release(1)
    await cpu
    assert catalog.state.status is LoadStatus.READY
    assert [p.name for p in catalog.products] == ["Ryzen 7"]

    client.release(0)
    await gpu
    assert [p.name for p in catalog.products] == ["Ryzen 7"]
    assert catalog.query.category_slug == "cpu"


@pytest.mark.asyncio
async def test_stale_response_does_not_end_loading_for_newer_query():
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    first = asyncio.create_task(catalog.set_term("old"))
    second = asyncio.create_task(catalog.set_term("new"))
    await wait_for_calls(client, 2)

    client.release(0)
    await first
    assert catalog.state.status is LoadStatus.LOADING
    assert catalog.products == ()

    client.release(1)
    await second
    assert catalog.state.status is LoadStatus.READY


@pytest.mark.asyncio
async def test_stale_failure_is_discarded():
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    gpu = asyncio.create_task(catalog.set_category("gpu"))
    cpu = asyncio.create_task(catalog.set_category("cpu"))
    await wait_for_calls(client, 2)

    client.release(1)
    await cpu
    client.release(0, httpx.ReadTimeout("timed out"))
    await gpu

    assert catalog.state.error is False
    assert [p.name for p in catalog.products] == ["Ryzen 7"]


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(8))
async def test_last_issued_query_wins_for_any_arrival_order(seed):
    rng = random.Random(seed)
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)
    slugs = [rng.choice(["", "cpu", "gpu"]) for _ in range(5)]

    tasks = [asyncio.create_task(catalog.set_category(slug)) for slug in slugs]
    await wait_for_calls(client, len(slugs))

    order = list(range(len(slugs)))
    rng.shuffle(order)
    for index in order:
        client.release(index)
        await tasks[index]

    assert list(catalog.products) == RESULTS[slugs[-1]]
    assert catalog.state.status is LoadStatus.READY


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(8))
async def test_last_issued_term_or_category_wins_for_any_arrival_order(seed):
    rng = random.Random(seed)
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    ops = []
    expected_term, expected_slug = "", ""
    for _ in range(6):
        if rng.random() < 0.5:
            expected_term = rng.choice(["", "ryzen", "rtx"])
            ops.append(catalog.set_term(expected_term))
        else:
            expected_slug = rng.choice(["", "cpu", "gpu"])
            ops.append(catalog.set_category(expected_slug))
    tasks = [asyncio.create_task(op) for op in ops]
    await wait_for_calls(client, len(tasks))

    # Each request answers with a product naming the call it belongs to.
    outcomes = [[make_product(i, f"call-{i}", "cpu")] for i in range(len(tasks))]
    order = list(range(len(tasks)))
    rng.shuffle(order)
    for index in order:
        client.release(index, outcomes[index])
        await tasks[index]

    expected_params = {}
    if expected_term:
        expected_params["q"] = expected_term
    if expected_slug:
        expected_params["category"] = expected_slug
    assert client.product_calls[-1] == expected_params
    assert list(catalog.products) == outcomes[-1]
    assert catalog.state.status is LoadStatus.READY


@pytest.mark.asyncio
async def test_query_issued_while_categories_load_supersedes_initialize():
    client = GatedCatalogClient(gate_categories=True)
    catalog = CatalogStateController(client)

    init = asyncio.create_task(catalog.initialize())
    for _ in range(100):
        if client.category_calls:
            break
        await asyncio.sleep(0)
    assert client.category_calls == 1

    cpu = asyncio.create_task(catalog.set_category("cpu"))
    await wait_for_calls(client, 1)
    client.release(0)
    await cpu

    client.release_categories()
    state = await init

    assert client.product_calls == [{"category": "cpu"}]
    assert [p.name for p in state.products] == ["Ryzen 7"]
    assert [c.slug for c in state.categories] == ["cpu", "gpu"]
    assert state.status is LoadStatus.READY


@pytest.mark.asyncio
async def test_network_failure_becomes_empty_ready_state_with_error():
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    task = asyncio.create_task(catalog.set_term("ryzen"))
    await wait_for_calls(client, 1)
    client.release(0, httpx.ConnectError("connection refused"))
    state = await task

    assert state.status is LoadStatus.READY
    assert state.products == ()
    assert state.error is True
    assert state.error_detail


@pytest.mark.asyncio
async def test_successful_query_clears_previous_error():
    client = GatedCatalogClient()
    catalog = CatalogStateController(client)

    task = asyncio.create_task(catalog.set_term("ryzen"))
    await wait_for_calls(client, 1)
    client.release(0, httpx.ConnectError("down"))
    await task
    assert catalog.state.error is True

    task = asyncio.create_task(catalog.set_category("cpu"))
    await wait_for_calls(client, 2)
    client.release(1)
    state = await task

    assert state.error is False
    assert state.error_detail is None
    assert len(state.products) == 1
