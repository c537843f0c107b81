import asyncio
import ipaddress
from typing import Dict, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class IPCounterStore:
    """
    Request counts per client IP address.

    A single asyncio lock guards the table; the request path writes through
    increment() and the reporter reads through snapshot(). Counts only grow
    and the table is never trimmed.
    """

    def __init__(self):
        self._counts: Dict[IPAddress, int] = {}
        self._lock = asyncio.Lock()

    async def increment(self, ip: Union[str, IPAddress]) -> None:
        """
        Add one request for an IP address

        Parameters:
        - ip: IP address as a string or ipaddress object

        Raises:
        - ValueError: If ip is not a valid IPv4 or IPv6 address
        """
        address = ipaddress.ip_address(ip)

        async with self._lock:
            self._counts[address] = self._counts.get(address, 0) + 1

    async def snapshot(self) -> Dict[IPAddress, int]:
        """
        Copy of the whole table as of the moment the lock was held
        """
        async with self._lock:
            return dict(self._counts)

    async def count(self, ip: Union[str, IPAddress]) -> int:
        address = ipaddress.ip_address(ip)

        async with self._lock:
            return self._counts.get(address, 0)
