import logging
import requests
import warnings
from urllib3.exceptions import InsecureRequestWarning
import pyotp

from unifi.exceptions import (UniFiAuthenticationError, UniFiConnectionError, UniFiControllerError,
                              UniFiLoginRequiredError)
from unifi.sites import Site

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "api.err.LoginRequired"


class Unifi:
    """
    Handles interactions with the UniFi controller API: session management,
    authentication, and switching a switch port between its "up" and "down" port
    profiles.

    The session cookie received on login is kept by the ``requests.Session`` owned
    by the instance and replayed on every later request. When the controller
    reports that the session is missing or expired, the failed request is retried
    exactly once after logging in again.

    :ivar base_url: Base URL of the UniFi controller, without a trailing slash
    :ivar username: Username for authentication
    :ivar password: Password for authentication
    :ivar mfa_secret: Optional TOTP secret; when set, a 2FA token is sent on login
    :ivar site_name: Name of the site the device belongs to
    :ivar port_enable_profile_id: Port profile ID applied by ``enable_port``
    :ivar port_disable_profile_id: Port profile ID applied by ``disable_port``
    :ivar timeout: Per-request timeout in seconds
    :ivar session: HTTP session holding the controller cookies
    :ivar logged_in: True once ``login`` succeeded on this instance
    :type base_url: str
    :type username: str
    :type password: str
    :type mfa_secret: Optional[str]
    :type site_name: str
    :type port_enable_profile_id: Optional[str]
    :type port_disable_profile_id: Optional[str]
    :type timeout: int
    :type session: requests.Session
    :type logged_in: bool
    """
    SUPPORTED_METHODS = ("POST", "PUT")

    def __init__(self, base_url=None, username=None, password=None, mfa_secret=None, site_name='default',
                 port_enable_profile_id=None, port_disable_profile_id=None, verify_ssl=True, timeout=10,
                 session=None):
        if not all([base_url, username, password]):
            raise ValueError("Missing required settings: base_url, login or password")

        self.base_url = base_url.rstrip('/')
        self.username = username
        self.password = password
        self.mfa_secret = mfa_secret
        self.site_name = site_name
        self.port_enable_profile_id = port_enable_profile_id
        self.port_disable_profile_id = port_disable_profile_id
        self.timeout = timeout
        self.logged_in = False
        self.sites = {}

        self.session = session if session is not None else requests.Session()
        self.session.verify = verify_ssl
        if not verify_ssl:
            # Suppress only the InsecureRequestWarning
            warnings.simplefilter("ignore", InsecureRequestWarning)

    @classmethod
    def from_settings(cls, settings, session=None):
        """Builds a client from a loaded ``config.Settings``."""
        return cls(base_url=settings.base_url,
                   username=settings.login,
                   password=settings.password,
                   mfa_secret=settings.mfa_secret,
                   site_name=settings.site,
                   port_enable_profile_id=settings.port_profile_up,
                   port_disable_profile_id=settings.port_profile_down,
                   verify_ssl=settings.verify_ssl,
                   timeout=settings.timeout,
                   session=session)

    @property
    def has_session(self):
        """True if a login succeeded or the session already carries cookies."""
        return self.logged_in or len(self.session.cookies) > 0

    def _send(self, method, url, data=None):
        """
        Sends a single HTTP request and returns the decoded response envelope.

        The envelope is returned as is, whatever its ``rc``; callers decide how to
        handle controller errors.

        :raises UniFiConnectionError: On transport failures, non-JSON responses or
            responses without a ``meta.rc`` of ``ok`` or ``error``.
        """
        method = method.upper()
        if method not in self.SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        try:
            if method == "POST":
                response = self.session.post(url, json=data, timeout=self.timeout)
            else:
                response = self.session.put(url, json=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise UniFiConnectionError(f"Request to {url} failed: {e}") from e

        try:
            response_data = response.json()
        except ValueError as e:
            raise UniFiConnectionError(
                f"Failed to decode JSON response from {url} (HTTP {response.status_code})") from e

        meta = response_data.get("meta") if isinstance(response_data, dict) else None
        if not isinstance(meta, dict) or meta.get("rc") not in ("ok", "error"):
            raise UniFiConnectionError(f"Malformed response from {url}: {response_data!r}")
        return response_data

    def login(self):
        """Logs in and keeps the session cookie on the shared session."""
        login_endpoint = f"{self.base_url}/api/login"
        payload = {
            "username": self.username,
            "password": self.password,
        }
        if self.mfa_secret:
            payload["ubic_2fa_token"] = pyotp.TOTP(self.mfa_secret).now()

        logger.debug(f"URL: {login_endpoint}")
        response_data = self._send("POST", login_endpoint, payload)
        meta = response_data["meta"]
        if meta["rc"] == "ok":
            logger.info("Logged in successfully.")
            self.logged_in = True
            return

        msg = meta.get("msg") or "unknown error"
        logger.error(f"Login failed: {msg}")
        raise UniFiAuthenticationError(msg)

    def make_request(self, endpoint, method="PUT", data=None):
        """
        Makes an authenticated request to the UniFi API.

        :param endpoint: Path relative to the base URL, e.g. ``/api/s/default/rest/device/<id>``.
        :param method: POST or PUT.
        :param data: JSON payload for POST and PUT requests.
        :return: The decoded response of an ``ok`` envelope.
        :rtype: dict
        :raises UniFiLoginRequiredError: If the controller requires a (new) login.
        :raises UniFiControllerError: For any other error reported by the controller.
        :raises UniFiConnectionError: On transport failures or malformed responses.
        """
        url = f"{self.base_url}{endpoint}"
        response_data = self._send(method, url, data)
        meta = response_data["meta"]
        if meta["rc"] == "ok":
            return response_data

        msg = meta.get("msg")
        if msg == LOGIN_REQUIRED:
            raise UniFiLoginRequiredError(msg)
        logger.debug(f"Request to {endpoint} failed: {msg}")
        raise UniFiControllerError(msg if msg is not None else "unknown error")

    def change_port_settings(self, device_id, port_number, profile_id):
        """
        Applies the port profile ``profile_id`` to port ``port_number`` of ``device_id``.

        Logs in first when no session exists yet. If the controller answers that a
        login is required, logs in again and retries once; a second failure is
        raised to the caller.
        """
        if not self.has_session:
            logger.debug("No session established. Authenticating...")
            self.login()

        device = self.site().device
        try:
            device.set_port_profile(device_id, port_number, profile_id)
        except UniFiLoginRequiredError:
            logger.info("Not logged in, trying to connect...")
            self.login()
            device.set_port_profile(device_id, port_number, profile_id)
        logger.info("Command OK")

    def enable_port(self, device_id, port_number):
        if not self.port_enable_profile_id:
            raise ValueError("No port profile configured to enable ports.")
        self.change_port_settings(device_id, port_number, self.port_enable_profile_id)

    def disable_port(self, device_id, port_number):
        if not self.port_disable_profile_id:
            raise ValueError("No port profile configured to disable ports.")
        self.change_port_settings(device_id, port_number, self.port_disable_profile_id)

    def site(self, name=None):
        """Get a single site by name, the configured site by default."""
        name = name or self.site_name
        if name not in self.sites:
            self.sites[name] = Site(self, name)
        return self.sites[name]

    def __getitem__(self, name):
        """Shortcut for accessing a site."""
        return self.site(name)
