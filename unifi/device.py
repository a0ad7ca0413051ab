from unifi.resources import BaseResource
from unifi.models import PortOverride
from icecream.icecream import IceCreamDebugger
import logging
logger = logging.getLogger(__name__)

# Payload dumps go to the debug log
ic = IceCreamDebugger(prefix="payload | ", outputFunction=logger.debug)


class Device(BaseResource):
    BASE_PATH = 'rest'
    API_PATH = '/api/s'

    def __init__(self, unifi, site, **kwargs):
        self.unifi = unifi
        self.site = site
        super().__init__(unifi, site, endpoint='device', api_path=self.API_PATH, base_path=self.BASE_PATH, **kwargs)

    def override_ports(self, device_id: str, overrides: list):
        """
        Replaces the port overrides of a device.

        :param device_id: The ``_id`` of the switch.
        :param overrides: List of ``PortOverride`` records.
        :return: The ``data`` list of the controller response.
        """
        payload = {"port_overrides": [override.to_dict() for override in overrides]}
        ic(payload)
        return self.update(payload, path=device_id)

    def set_port_profile(self, device_id: str, port_number: int, profile_id: str):
        return self.override_ports(device_id, [PortOverride(port_idx=port_number, portconf_id=profile_id)])
