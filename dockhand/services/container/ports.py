"""Translation of run arguments into container configuration.

Port specifications follow the familiar ``docker run -p`` shape,
``[host_ip:][host_port:]container_port[/proto]``. Only the container side
is exposed; host-side parts are accepted and ignored since no port binding
is applied. The protocol suffix is kept exactly as written and never
invented when absent.
"""

from typing import Dict, Iterable, List, Optional

from ...models.container import ContainerConfig
from ...models.errors import InvalidPortSpecError

MIN_PORT = 1
MAX_PORT = 65535


def _parse_port_number(spec: str, value: str) -> int:
    if not value.isdigit():
        raise InvalidPortSpecError(spec, f"port {value!r} is not a number")
    port = int(value)
    if not MIN_PORT <= port <= MAX_PORT:
        raise InvalidPortSpecError(spec, f"port {port} is out of range")
    return port


def _container_part(spec: str) -> str:
    # IPv6 host addresses are bracketed: [::1]:8080:80
    if spec.startswith("["):
        end = spec.find("]")
        if end == -1:
            raise InvalidPortSpecError(spec, "unterminated IPv6 address")
        rest = spec[end + 1 :]
        if not rest.startswith(":"):
            raise InvalidPortSpecError(spec, "missing port after host address")
        return rest.rsplit(":", 1)[-1]

    parts = spec.split(":")
    if len(parts) > 3:
        raise InvalidPortSpecError(spec, "too many ':' separated parts")
    return parts[-1]


def parse_port_spec(spec: str) -> List[str]:
    """Parse one port specification into the container ports it exposes.

    Args:
        spec: e.g. ``"8080"``, ``"8080/tcp"``, ``"27017:27017"``,
            ``"127.0.0.1:5000:5000/udp"`` or ``"7000-7002/tcp"``.

    Returns:
        Exposed port strings, one per port in a range, each carrying the
        original protocol suffix (if any).
    """
    spec = spec.strip()
    if not spec:
        raise InvalidPortSpecError(spec, "empty specification")

    container = _container_part(spec)
    port_range, sep, proto = container.partition("/")
    if sep and not proto:
        raise InvalidPortSpecError(spec, "empty protocol")
    suffix = f"/{proto}" if sep else ""

    start_str, dash, end_str = port_range.partition("-")
    start = _parse_port_number(spec, start_str)
    if not dash:
        return [f"{start_str}{suffix}"]

    end = _parse_port_number(spec, end_str)
    if end < start:
        raise InvalidPortSpecError(spec, f"range end {end} is below start {start}")
    return [f"{port}{suffix}" for port in range(start, end + 1)]


def build_exposed_ports(specs: Optional[Iterable[str]]) -> Dict[str, dict]:
    """Build the exposed-port set, deduplicated in first-seen order."""
    exposed: Dict[str, dict] = {}
    for spec in specs or []:
        for port in parse_port_spec(spec):
            exposed.setdefault(port, {})
    return exposed


def build_container_config(
    image: str,
    env_vars: Optional[Iterable[str]] = None,
    exposed_ports: Optional[Iterable[str]] = None,
) -> ContainerConfig:
    """Translate run arguments into a ContainerConfig."""
    return ContainerConfig(
        image=image,
        env=list(env_vars or []),
        exposed_ports=build_exposed_ports(exposed_ports),
    )
