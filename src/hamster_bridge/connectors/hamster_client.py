# src/hamster_bridge/connectors/hamster_client.py

from __future__ import annotations

import logging
from typing import Any

from dbus_next import BusType, Variant
from dbus_next.aio import MessageBus
from dbus_next.errors import AuthError, DBusError, InterfaceNotFoundError, InvalidAddressError

from ..core.ports import HamsterClient, HamsterConnector
from ..errors import HamsterUnavailable

logger = logging.getLogger(__name__)

# Anything that means "the bus or the service is not there".
_UNREACHABLE_ERRORS = (OSError, EOFError, AuthError, DBusError, InterfaceNotFoundError, InvalidAddressError)


def _method_in_signatures(introspection: Any, interface: str, method: str) -> list[str]:
    for iface in getattr(introspection, "interfaces", []) or []:
        if iface.name != interface:
            continue
        for m in iface.methods:
            if m.name == method:
                return [arg.signature for arg in m.in_args]
    return []


class HamsterDBusClient:
    """
    Thin wrapper around the org.gnome.Hamster proxy interface.

    Hamster declares StopTracking's end time as a variant on some releases and as
    an int on others; the introspected signature decides how the argument is sent.
    """

    def __init__(self, bus: Any, interface: Any, *, stop_tracking_signature: str = "i") -> None:
        self._bus = bus
        self._iface = interface
        self._stop_sig = stop_tracking_signature

    async def add_fact(
            self,
            description: str,
            start_time: int = 0,
            end_time: int = 0,
            temporary: bool = False,
    ) -> None:
        try:
            fact_id = await self._iface.call_add_fact(description, start_time, end_time, temporary)
        except _UNREACHABLE_ERRORS as e:
            logger.warning("AddFact failed: %r", e)
            raise HamsterUnavailable() from e
        logger.info("Hamster fact started: %r (id=%s)", description, fact_id)

    async def stop_tracking(self, end_time: int = 0) -> None:
        arg: Any = Variant("i", end_time) if self._stop_sig == "v" else end_time
        try:
            await self._iface.call_stop_tracking(arg)
        except _UNREACHABLE_ERRORS as e:
            logger.warning("StopTracking failed: %r", e)
            raise HamsterUnavailable() from e
        logger.info("Hamster tracking stopped.")

    def disconnect(self) -> None:
        try:
            self._bus.disconnect()
        except Exception:
            logger.debug("Bus disconnect failed.", exc_info=True)


async def connect_hamster(
        *,
        bus_name: str,
        object_path: str,
        interface: str,
        bus_type: BusType = BusType.SESSION,
) -> HamsterDBusClient:
    """
    Connect to the session bus and bind the Hamster interface.

    Raises HamsterUnavailable when the bus cannot be reached or Hamster is not running.
    """
    try:
        bus = await MessageBus(bus_type=bus_type).connect()
    except _UNREACHABLE_ERRORS as e:
        logger.info("D-Bus session bus is not reachable: %r", e)
        raise HamsterUnavailable() from e

    try:
        introspection = await bus.introspect(bus_name, object_path)
        proxy = bus.get_proxy_object(bus_name, object_path, introspection)
        iface = proxy.get_interface(interface)
    except _UNREACHABLE_ERRORS as e:
        logger.info("Hamster is not available on %s %s: %r", bus_name, object_path, e)
        bus.disconnect()
        raise HamsterUnavailable() from e

    stop_sigs = _method_in_signatures(introspection, interface, "StopTracking")
    logger.info("Connected to Hamster (%s %s).", bus_name, object_path)
    return HamsterDBusClient(bus, iface, stop_tracking_signature=stop_sigs[0] if stop_sigs else "i")


class HamsterConnection:
    """
    Lazily acquired Hamster client.

    The handle is created on first use and re-created whenever it is missing; a failed
    attempt leaves it unset so the next command tries again. No retries, no backoff.
    """

    def __init__(self, connector: HamsterConnector) -> None:
        self._connector = connector
        self._client: HamsterClient | None = None

    @property
    def client(self) -> HamsterClient | None:
        return self._client

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def acquire(self) -> HamsterClient:
        if self._client is not None:
            return self._client
        self._client = await self._connector()
        return self._client

    def invalidate(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            client.disconnect()
