from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AnchorSnapshot:
    """Rendered state of one anchor element on the current page."""

    text: str
    href: str
    heading: str | None = None


class PageDriverError(Exception):
    """Base class for failures raised by a page driver."""


class NavigationError(PageDriverError):
    """The driver could not load the requested URL."""


class ProbeTimeoutError(PageDriverError):
    """The probe selector did not match within the timeout, or the probe itself failed."""

    def __init__(self, selector: str, timeout_ms: int) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(f"No element matched {selector!r} within {timeout_ms} ms.")


class PageDriver(ABC):
    """Port for a single browser page session."""

    @abstractmethod
    async def navigate(self, url: str, timeout_ms: int) -> None:
        """Load url in the page. Raises NavigationError on failure."""
        ...

    @abstractmethod
    async def wait_for(self, selector: str, timeout_ms: int) -> None:
        """Block until selector matches. Raises ProbeTimeoutError on timeout or probe failure."""
        ...

    @abstractmethod
    async def collect_anchors(self) -> list[AnchorSnapshot]:
        ...

    @abstractmethod
    async def find_control(self, label: str) -> Any | None:
        """Return a handle to a visible button named label, or None."""
        ...

    @abstractmethod
    async def activate(self, control: Any) -> None:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...


class PageDriverFactory(ABC):
    """Port for acquiring new page sessions."""

    @abstractmethod
    async def open(self) -> PageDriver:
        ...
