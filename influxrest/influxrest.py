import dataclasses
import logging
import urllib.parse
from typing import Optional

import requests

import influxrest  # in order to access the package-level variables default_*
from .exceptions import InfluxDBServerError, InfluxDBDecodeError
from .series import Series

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    host: str = ""
    username: str = ""
    password: str = ""
    database: str = ""
    session: Optional[requests.Session] = None
    is_secure: bool = False

    def resolve(self):
        """Return a copy with every empty field replaced by its default."""
        return dataclasses.replace(
            self,
            host=self.host or influxrest.default_host,
            username=self.username or influxrest.default_username,
            password=self.password or influxrest.default_password,
            database=self.database or influxrest.default_database,
            session=self.session if self.session is not None else requests.Session(),
        )


def _raise_for_status(res, close_response=True):
    """Raise InfluxDBServerError unless the status code is in [200, 300).

    With close_response=False a successful response is left open so that the
    caller can read the body, and the caller becomes responsible for closing
    it. A failed response is always closed here.
    """
    if 200 <= res.status_code < 300:
        if close_response:
            res.close()
        return

    try:
        body = res.text
    finally:
        res.close()
    logger.debug("Server returned %s", res.status_code)
    raise InfluxDBServerError(res.status_code, body)


class Client:
    def __init__(self, config=None, **kwargs):
        if config is None:
            config = ClientConfig(**kwargs)
        elif kwargs:
            config = dataclasses.replace(config, **kwargs)
        # Only a session created by resolve() is closed by close().
        self._owns_session = config.session is None
        self._config = config.resolve()
        self._scheme = "https" if self._config.is_secure else "http"

    def __repr__(self):
        return f"Client({self._scheme}://{self.host}, database={self.database!r})"

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        if self._owns_session:
            self.session.close()

    @property
    def host(self):
        return self._config.host

    @property
    def username(self):
        return self._config.username

    @property
    def password(self):
        return self._config.password

    @property
    def database(self):
        return self._config.database

    @property
    def session(self):
        return self._config.session

    @property
    def scheme(self):
        return self._scheme

    # URL and request helpers:
    # ========================

    def _url(self, path, params=(), username=None, password=None):
        # Path segments and credentials go in unescaped, names containing
        # "/", "?" or "&" will produce a broken URL.
        if username is None:
            username = self.username
        if password is None:
            password = self.password
        url = f"{self._scheme}://{self.host}{path}?u={username}&p={password}"
        for name, value in params:
            url += f"&{name}={value}"
        return url

    def _request(self, method, path, payload=None, params=(), **credentials):
        url = self._url(path, params, **credentials)
        logger.debug("%s %s", method, path)
        return self.session.request(method, url, json=payload)

    def _send(self, method, path, payload=None, params=(), **credentials):
        res = self._request(method, path, payload, params, **credentials)
        _raise_for_status(res)

    def _get_json(self, path, params=()):
        res = self._request("GET", path, params=params)
        _raise_for_status(res, close_response=False)
        with res:
            return res.json()

    def _list_something(self, path):
        records = self._get_json(path)
        if not isinstance(records, list) or not all(
            isinstance(r, dict) for r in records
        ):
            raise InfluxDBDecodeError(f"Expected a JSON array of objects from {path}")
        return records

    # Databases:
    # ==========

    def create_database(self, name):
        self._send("POST", "/db", {"name": name})

    def delete_database(self, name):
        self._send("DELETE", "/db/" + name)

    def get_database_list(self):
        return self._list_something("/db")

    # Cluster admins:
    # ===============

    def create_cluster_admin(self, name, password):
        self._send("POST", "/cluster_admins", {"name": name, "password": password})

    def update_cluster_admin(self, name, password):
        self._send("POST", "/cluster_admins/" + name, {"password": password})

    def delete_cluster_admin(self, name):
        self._send("DELETE", "/cluster_admins/" + name)

    def get_cluster_admin_list(self):
        return self._list_something("/cluster_admins")

    # Database users:
    # ===============

    def create_database_user(self, database, name, password):
        self._send(
            "POST",
            f"/db/{database}/users",
            {"name": name, "password": password},
        )

    def update_database_user(self, database, name, password=None, is_admin=None):
        """Change a user's password and/or admin flag.

        Only the arguments that are not None end up in the payload, so
        calling this with neither sends an empty object.
        """
        payload = {}
        if password is not None:
            payload["password"] = password
        if is_admin is not None:
            payload["admin"] = bool(is_admin)
        self._send("POST", f"/db/{database}/users/{name}", payload)

    def delete_database_user(self, database, name):
        self._send("DELETE", f"/db/{database}/users/{name}")

    def get_database_user_list(self, database):
        return self._list_something(f"/db/{database}/users")

    def alter_database_privilege(self, database, name, is_admin):
        self.update_database_user(database, name, is_admin=is_admin)

    def authenticate_database_user(self, database, username, password):
        self._send(
            "GET",
            f"/db/{database}/authenticate",
            username=username,
            password=password,
        )

    # Series:
    # =======

    def write_series(self, series, time_precision=None):
        payload = [s.to_dict() if isinstance(s, Series) else s for s in series]
        params = []
        if time_precision:
            params.append(("time_precision", str(time_precision)))
        self._send("POST", f"/db/{self.database}/series", payload, params)

    def query(self, query, time_precision=None):
        params = []
        if time_precision:
            params.append(("time_precision", str(time_precision)))
        params.append(("q", urllib.parse.quote(query, safe="")))

        data = self._get_json(f"/db/{self.database}/series", params)
        if not isinstance(data, list):
            raise InfluxDBDecodeError("Expected a JSON array of series")
        return [Series.from_dict(s) for s in data]

    # Server:
    # =======

    def ping(self):
        self._send("GET", "/ping")

    def get_server_version(self):
        res = self._request("GET", "/ping")
        _raise_for_status(res)
        return res.headers.get("X-Influxdb-Version")
