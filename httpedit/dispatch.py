"""Request dispatch contract and its ``requests``-backed implementation.

The editor only ever talks to a :class:`RequestDispatcher`: hand it a method,
URL, optional body and headers, get back a :class:`DispatchResult` or a
:class:`~httpedit.errors.DispatchError`. Everything about transport (host
joining, TLS verification, proxies from the environment, decoding) lives here.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from .errors import DispatchError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost"


@dataclass(frozen=True)
class DispatchResult:
    status_code: int
    reason: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    json: Any = None


class RequestDispatcher(Protocol):
    def send(
        self,
        method: str,
        url: str,
        body: str | None,
        headers: Mapping[str, str],
    ) -> DispatchResult: ...


def join_url(host: str, url: str) -> str:
    """Resolve ``url`` against ``host`` unless it is already absolute."""
    if url.startswith(("http://", "https://")):
        return url
    base = host.rstrip("/") or DEFAULT_HOST
    return f"{base}/{url.lstrip('/')}"


def _looks_like_json(body: str) -> bool:
    return body.lstrip().startswith(("{", "["))


class RequestsDispatcher:
    """Send requests through one shared :class:`requests.Session`.

    Credentials come from the active profile: ``api_key`` is sent as an
    ``ApiKey`` authorization header and wins over ``user``/``password`` basic
    auth. An explicit ``Authorization`` header on the request wins over both.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        *,
        insecure: bool = False,
        default_headers: Mapping[str, str] | None = None,
        user: str | None = None,
        password: str | None = None,
        api_key: str | None = None,
        ca_cert: str | None = None,
        content_type: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.host = host or DEFAULT_HOST
        self.insecure = insecure
        self.default_headers = CaseInsensitiveDict(default_headers or {})
        self.user = user
        self.password = password
        self.api_key = api_key
        self.ca_cert = ca_cert
        self.content_type = content_type
        self.session = session if session is not None else requests.Session()

    @property
    def verify(self) -> bool | str:
        """``requests`` ``verify`` value: off when insecure, else the CA bundle path if set."""
        if self.insecure:
            return False
        if self.ca_cert:
            return os.path.expanduser(self.ca_cert)
        return True

    def build_headers(self, body: str | None, headers: Mapping[str, str]) -> CaseInsensitiveDict:
        merged = CaseInsensitiveDict(self.default_headers)
        merged.update(headers)
        if self.api_key and "Authorization" not in merged:
            merged["Authorization"] = f"ApiKey {self.api_key}"
        if body is not None and "Content-Type" not in merged:
            if self.content_type:
                merged["Content-Type"] = self.content_type
            elif _looks_like_json(body):
                merged["Content-Type"] = "application/json"
        return merged

    def build_auth(self, headers: Mapping[str, str]) -> tuple[str, str] | None:
        if "Authorization" in headers or self.user is None or self.password is None:
            return None
        return self.user, self.password

    def send(
        self,
        method: str,
        url: str,
        body: str | None,
        headers: Mapping[str, str],
    ) -> DispatchResult:
        target = join_url(self.host, url)
        merged = self.build_headers(body, headers)
        logger.info("dispatching %s %s", method, target)
        try:
            response = self.session.request(
                method,
                target,
                data=body.encode("utf-8") if body is not None else None,
                headers=dict(merged),
                auth=self.build_auth(merged),
                verify=self.verify,
            )
        except (requests.RequestException, OSError, ValueError) as exc:
            # non-latin-1 header text and a missing CA bundle surface outside RequestException
            logger.warning("request %s %s failed: %s", method, target, exc)
            raise DispatchError(str(exc)) from exc

        parsed = None
        if "json" in response.headers.get("Content-Type", "").lower():
            try:
                parsed = response.json()
            except ValueError:
                logger.debug("response declared JSON but did not parse")
        logger.info("%s %s -> %s", method, target, response.status_code)
        return DispatchResult(
            status_code=response.status_code,
            reason=response.reason or "",
            headers=dict(response.headers.items()),
            body=response.text,
            json=parsed,
        )
