from uuid import uuid4

import pytest
import pytest_asyncio

from delivery.shared.domain.pagination import PageRequest
from delivery.shared.exceptions import ConflictError, ForbiddenError, InvalidArgumentError, NotFoundError
from delivery.stores.application.dto import AddProductRequest, CreateStoreRequest, RegionRequest
from delivery.stores.application.product_service import ProductService
from delivery.stores.application.region_service import RegionService
from delivery.stores.application.store_service import StoreService
from delivery.stores.domain.store import Category
from delivery.users.domain.access_policy import Actor
from delivery.users.domain.role import Role
from tests.support.fakes import (
    FakeUnitOfWork,
    InMemoryProductRepository,
    InMemoryRegionRepository,
    InMemoryStoreRepository,
)

MANAGER = Actor("boss", Role.MANAGER)
CUSTOMER = Actor("kim", Role.CUSTOMER)


@pytest.fixture
def uow():
    return FakeUnitOfWork(
        stores=InMemoryStoreRepository(),
        products=InMemoryProductRepository(),
        regions=InMemoryRegionRepository(),
    )


@pytest.fixture
def stores(uow):
    return StoreService(lambda: uow)


@pytest.fixture
def products(uow):
    return ProductService(lambda: uow)


@pytest.fixture
def regions(uow):
    return RegionService(lambda: uow)


@pytest_asyncio.fixture
async def store(stores):
    return await stores.create_store(MANAGER, CreateStoreRequest("Kim's", "1 Main St", Category.KOREAN))


@pytest.mark.asyncio
async def test_customer_cannot_create_store(stores):
    with pytest.raises(ForbiddenError):
        await stores.create_store(CUSTOMER, CreateStoreRequest("x", "y", Category.PIZZA))


@pytest.mark.asyncio
async def test_get_store(stores, store):
    assert (await stores.get_store(store.id)).name == "Kim's"
    with pytest.raises(NotFoundError):
        await stores.get_store(uuid4())


@pytest.mark.asyncio
async def test_add_product(products, store):
    view = await products.add_product_to_store(store.id, AddProductRequest("Bibimbap", 9000), MANAGER)
    assert view.store_id == store.id
    assert view.price == 9000


@pytest.mark.asyncio
async def test_duplicate_product_name_in_store(products, store):
    await products.add_product_to_store(store.id, AddProductRequest("Bibimbap", 9000), MANAGER)
    with pytest.raises(ConflictError):
        await products.add_product_to_store(store.id, AddProductRequest("Bibimbap", 8000), MANAGER)


@pytest.mark.asyncio
async def test_add_product_to_missing_store(products):
    with pytest.raises(NotFoundError):
        await products.add_product_to_store(uuid4(), AddProductRequest("x", 1), MANAGER)


@pytest.mark.asyncio
async def test_customer_cannot_add_product(products, store):
    with pytest.raises(ForbiddenError):
        await products.add_product_to_store(store.id, AddProductRequest("x", 1), CUSTOMER)


@pytest.mark.asyncio
async def test_list_products_by_price(products, store):
    for name, price in (("a", 300), ("b", 100), ("c", 200)):
        await products.add_product_to_store(store.id, AddProductRequest(name, price), MANAGER)

    page = await products.list_products(sort_by="price", order="asc")
    assert [p.price for p in page.items] == [100, 200, 300]
    page = await products.list_products(sort_by="price", order="desc", size=2)
    assert [p.price for p in page.items] == [300, 200]
    assert page.total == 3


@pytest.mark.asyncio
async def test_list_products_rejects_unknown_sort(products):
    with pytest.raises(InvalidArgumentError) as exc:
        await products.list_products(sort_by="name")
    assert exc.value.message == "SortBy must be one of the allowed values: createdAt, updatedAt, price"


@pytest.mark.asyncio
async def test_region_lifecycle(regions, store):
    created = await regions.create_region(MANAGER, RegionRequest(store.id, "Gangnam"))
    assert created.created_by == "boss"

    updated = await regions.update_region(created.id, RegionRequest(store.id, "Seocho"), Actor("root", Role.MASTER))
    assert updated.name == "Seocho"
    assert updated.updated_by == "root"

    found = await regions.search_regions("SEO", PageRequest())
    assert [r.id for r in found.items] == [created.id]

    await regions.delete_region(created.id, MANAGER)
    assert (await regions.list_regions(PageRequest())).total == 0
    with pytest.raises(NotFoundError):
        await regions.update_region(created.id, RegionRequest(store.id, "x"), MANAGER)


@pytest.mark.asyncio
async def test_regions_for_store(regions, stores, store):
    other = await stores.create_store(MANAGER, CreateStoreRequest("Other", "2 Main St", Category.CHICKEN))
    await regions.create_region(MANAGER, RegionRequest(store.id, "A"))
    await regions.create_region(MANAGER, RegionRequest(other.id, "B"))

    page = await regions.list_regions(PageRequest(), store_id=store.id)
    assert [r.name for r in page.items] == ["A"]
    assert (await regions.list_regions(PageRequest())).total == 2
    with pytest.raises(NotFoundError):
        await regions.list_regions(PageRequest(), store_id=uuid4())


@pytest.mark.asyncio
async def test_region_requires_existing_store(regions):
    with pytest.raises(NotFoundError):
        await regions.create_region(MANAGER, RegionRequest(uuid4(), "A"))


@pytest.mark.asyncio
async def test_customer_cannot_change_regions(regions, store):
    region = await regions.create_region(MANAGER, RegionRequest(store.id, "A"))
    with pytest.raises(ForbiddenError):
        await regions.create_region(CUSTOMER, RegionRequest(store.id, "B"))
    with pytest.raises(ForbiddenError):
        await regions.delete_region(region.id, CUSTOMER)


@pytest.mark.asyncio
async def test_duplicate_product_slipping_past_the_check_is_still_a_conflict(products, store, uow, monkeypatch):
    await products.add_product_to_store(store.id, AddProductRequest("Bibimbap", 9000), MANAGER)

    async def not_seen(name, store_id):
        return False

    monkeypatch.setattr(uow.products, "exists_active_by_name_in_store", not_seen)
    with pytest.raises(ConflictError) as exc:
        await products.add_product_to_store(store.id, AddProductRequest("Bibimbap", 8000), MANAGER)
    assert exc.value.message == "Product already exists in this store : Bibimbap"
    assert len(uow.products.rows) == 1
