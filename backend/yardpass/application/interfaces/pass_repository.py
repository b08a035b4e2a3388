"""Abstract repository interface (port) for FanPass persistence."""

from abc import ABC, abstractmethod

from yardpass.domain.entities import FanPass


class PassRepository(ABC):
    """Port for pass persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_anon_id(self, anon_id: str) -> FanPass | None:
        """Retrieve the pass owned by an anonymous device."""
        ...

    @abstractmethod
    async def save(self, fan_pass: FanPass) -> FanPass:
        """Persist a pass, replacing any previous pass for the same anon id."""
        ...

    @abstractmethod
    async def list_all(self) -> list[FanPass]:
        """Retrieve every stored pass, newest first."""
        ...
