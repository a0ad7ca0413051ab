import logging

logger = logging.getLogger(__name__)


class BaseResource:

    def __init__(self, unifi, site, endpoint, **kwargs):
        self.unifi = unifi
        self.endpoint: str = endpoint
        self.site = site
        self.base_path: str = kwargs.get('base_path', None)
        self.api_path: str = kwargs.get('api_path', None)

    def url(self, path: str = None) -> str:
        """
        Builds the endpoint path of this resource, relative to the controller base URL.

        :param path: Optional item path (usually the item ID) appended to the endpoint.
        :type path: str
        :return: The endpoint path, e.g. ``/api/s/default/rest/device/<id>``.
        :rtype: str
        """
        site_name = self.site.name
        if self.base_path:
            url = f"{self.api_path}/{site_name}/{self.base_path}/{self.endpoint}"
        else:
            url = f"{self.api_path}/{site_name}/{self.endpoint}"
        if path:
            url = f"{url}/{path}"
        return url

    def update(self, data: dict, path: str):
        """
        Sends a PUT request with the given data to the item identified by ``path``.

        Errors reported by the controller are raised by ``Unifi.make_request``; a
        returned value always means the controller accepted the update.

        :param data: The JSON payload of the update.
        :type data: dict
        :param path: The item path, usually the item ID.
        :type path: str
        :return: The ``data`` list of the controller response.
        :rtype: list
        :raises ValueError: If no data or no path is given.
        """
        if not data:
            raise ValueError(f'No data to update {self.endpoint}.')
        if not path:
            raise ValueError(f'Item ID required to update {self.endpoint}.')
        response = self.unifi.make_request(self.url(path), 'PUT', data=data)
        logger.info(f"Successfully updated {self.endpoint} with ID {path} at site '{self.site.name}'")
        return response.get('data', [])
