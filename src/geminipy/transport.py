from typing import Protocol

class Transport(Protocol):
    @property
    def is_closed(self) -> bool:
        ...

    async def connect(self, host: str, port: int) -> None:
        ...

    async def write(self, data: bytes) -> int:
        ...

    async def read(self, max_bytes: int) -> bytes:
        ...

    async def close(self) -> None:
        ...

    def abort(self) -> None:
        ...
