from dataclasses import asdict, dataclass, field
from typing import List


@dataclass
class PortOverride:
    """Desired configuration of a single switch port."""
    port_idx: int
    portconf_id: str
    poe_mode: str = "auto"
    port_security_mac_address: List[str] = field(default_factory=list)
    stp_port_mode: bool = True
    autoneg: bool = True
    port_security_enabled: bool = False

    def to_dict(self) -> dict:
        return asdict(self)
