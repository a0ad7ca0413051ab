import logging
from .device import Device
logger = logging.getLogger(__name__)


class Site:

    def __init__(self, unifi, name):
        """
        :param unifi: Unifi instance
        :param name: Site name used in the API paths, e.g. ``default``
        """

        self.unifi = unifi
        self.name: str = name

        # Initialize resource classes
        self.device = Device(self.unifi, self)
