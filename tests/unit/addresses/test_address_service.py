import pytest

from delivery.addresses.application.address_service import AddAddressRequest, AddressService
from delivery.shared.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from delivery.users.domain.access_policy import Actor
from delivery.users.domain.account import Account
from delivery.users.domain.role import Role
from tests.support.fakes import FakeUnitOfWork, InMemoryAccountRepository, InMemoryAddressRepository

ACTOR = Actor("kim", Role.CUSTOMER)


@pytest.fixture
def uow():
    accounts = InMemoryAccountRepository(
        [Account(username="kim", email="kim@mail.com", nickname="Kim", password_hash="x")]
    )
    return FakeUnitOfWork(accounts=accounts, addresses=InMemoryAddressRepository())


@pytest.fixture
def service(uow):
    return AddressService(uow_factory=lambda: uow)


@pytest.mark.asyncio
async def test_add_address_defaults_detail_to_empty(service):
    view = await service.add_address(ACTOR, AddAddressRequest("1 Main St", "home"))
    assert view.detail_address == ""
    assert view.delivery_address_info == "home"


@pytest.mark.asyncio
async def test_duplicate_address_for_same_account(service):
    await service.add_address(ACTOR, AddAddressRequest("1 Main St", "home"))
    with pytest.raises(ConflictError) as exc:
        await service.add_address(ACTOR, AddAddressRequest("1 Main St", "office"))
    assert exc.value.message == "Delivery address already exists for this user : 1 Main St"


@pytest.mark.asyncio
async def test_at_most_three_addresses(service):
    for i in range(3):
        await service.add_address(ACTOR, AddAddressRequest(f"{i} Main St", "x", "apt 1"))
    with pytest.raises(InvalidArgumentError):
        await service.add_address(ACTOR, AddAddressRequest("9 Main St", "x"))
    assert len(await service.list_addresses(ACTOR)) == 3


@pytest.mark.asyncio
async def test_unknown_actor(service):
    with pytest.raises(NotFoundError) as exc:
        await service.list_addresses(Actor("ghost", Role.CUSTOMER))
    assert exc.value.message == "Invalid username : ghost"


@pytest.mark.asyncio
async def test_duplicate_slipping_past_the_check_is_still_a_conflict(service, uow, monkeypatch):
    await service.add_address(ACTOR, AddAddressRequest("1 Main St", "home"))

    async def not_seen(account_id, delivery_address):
        return False

    monkeypatch.setattr(uow.addresses, "exists_for_account", not_seen)
    with pytest.raises(ConflictError) as exc:
        await service.add_address(ACTOR, AddAddressRequest("1 Main St", "office"))
    assert exc.value.message == "Delivery address already exists for this user : 1 Main St"
    assert len(uow.addresses.rows) == 1
