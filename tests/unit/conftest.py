import pytest

from nodelink.supervisor import ConnectionSupervisor
from tests.helpers.fakes import FakeClock, FakeOpener, make_config, sequential_ids


@pytest.fixture
def clock():
    return FakeClock(block_on={30.0})


@pytest.fixture
def make_supervisor(clock):
    def factory(*results, proxy_url=None, config=None, user_id="user-1"):
        opener = FakeOpener(*results, clock=clock)
        return ConnectionSupervisor(
            user_id,
            proxy_url,
            config=config or make_config(),
            clock=clock,
            id_generator=sequential_ids(),
            opener=opener,
        )

    return factory
