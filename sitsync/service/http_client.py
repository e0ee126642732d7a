"""HTTP client for a compliance service REST gateway."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Any

import httpx

from sitsync.exceptions import (
    RemoteOperationError,
    RulePackageNotFoundError,
    ServiceUnavailableError,
    UnsupportedOperationError,
)
from sitsync.service.base import RemoteDictionary

if TYPE_CHECKING:
    from sitsync.config.models import ServiceConfig

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"ManagementObjectNotFound", "NotFound", "ResourceNotFound"}
UNSUPPORTED_STATUS = {405, 501}


class HttpComplianceClient:
    """Synchronous client; one blocking request per operation."""

    def __init__(
        self,
        *,
        base_url: str,
        token: str = "",
        timeout_seconds: float = 60.0,
        supports_update: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not base_url.strip():
            raise ValueError("base_url is required")
        headers = {"Accept": "application/json", "User-Agent": "sitsync"}
        if token.strip():
            headers["Authorization"] = f"Bearer {token.strip()}"
        self.base_url = base_url.strip().rstrip("/")
        self.supports_update = supports_update
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ServiceConfig, transport: httpx.BaseTransport | None = None) -> HttpComplianceClient:
        return cls(
            base_url=config.base_url,
            token=config.token,
            timeout_seconds=config.timeout_seconds,
            supports_update=config.dictionary_update,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpComplianceClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def list_dictionaries(self) -> list[RemoteDictionary]:
        try:
            response = self._client.get("/dictionaries")
        except httpx.TransportError as exc:
            raise ServiceUnavailableError(f"cannot reach {self.base_url}: {exc}") from exc
        if response.status_code in {401, 403}:
            raise ServiceUnavailableError(
                f"not authorized to list dictionaries ({response.status_code}): {_error_message(response)}"
            )
        if response.is_error:
            raise ServiceUnavailableError(
                f"listing dictionaries failed ({response.status_code}): {_error_message(response)}"
            )
        payload = _safe_json(response)
        items = payload.get("value") if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            raise ServiceUnavailableError(
                f"unexpected listing response from {self.base_url}: expected a JSON list of dictionaries"
            )
        results: list[RemoteDictionary] = []
        for item in items:
            if not isinstance(item, dict) or not item.get("id"):
                continue
            results.append(
                RemoteDictionary(
                    identity=str(item["id"]),
                    name=str(item.get("name", "")),
                    description=str(item.get("description", "")),
                    content=_decode(item.get("fileData"), item["id"]),
                )
            )
        logger.debug("Listed %d dictionaries from %s", len(results), self.base_url)
        return results

    def create_dictionary(self, name: str, description: str, content: bytes) -> str:
        body = {"name": name, "description": description, "fileData": _encode(content)}
        response = self._send("createDictionary", "POST", "/dictionaries", body)
        payload = _safe_json(response)
        identity = payload.get("id") if isinstance(payload, dict) else None
        if not identity:
            raise RemoteOperationError("createDictionary", "service returned no dictionary id", response.status_code)
        return str(identity)

    def update_dictionary(self, identity: str, content: bytes) -> None:
        if not self.supports_update:
            raise UnsupportedOperationError("updateDictionary")
        self._send("updateDictionary", "PATCH", f"/dictionaries/{identity}", {"fileData": _encode(content)})

    def delete_dictionary(self, identity: str) -> None:
        self._send("deleteDictionary", "DELETE", f"/dictionaries/{identity}")

    def import_rule_package(self, data: bytes) -> None:
        self._send("importRulePackage", "POST", "/rule-packages", {"fileData": _encode(data)})

    def update_rule_package(self, data: bytes) -> None:
        self._send("updateRulePackage", "PUT", "/rule-packages", {"fileData": _encode(data)})

    def _send(self, operation: str, method: str, path: str, body: dict[str, Any] | None = None) -> httpx.Response:
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            response = self._client.request(method, path, json=body)
        except httpx.TransportError as exc:
            raise RemoteOperationError(operation, f"cannot reach {self.base_url}: {exc}") from exc
        if not response.is_error:
            return response
        message = _error_message(response)
        if operation == "updateDictionary" and response.status_code in UNSUPPORTED_STATUS:
            raise UnsupportedOperationError(operation)
        if operation == "updateRulePackage" and _is_not_found(response):
            raise RulePackageNotFoundError(operation, message, response.status_code)
        raise RemoteOperationError(operation, message, response.status_code)


def _encode(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")


def _decode(raw: Any, identity: Any) -> bytes | None:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise ServiceUnavailableError(
            f"unexpected listing response: fileData of dictionary {identity} is not base64"
        ) from exc


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    payload = _safe_json(response)
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        return payload["error"]
    return payload if isinstance(payload, dict) else {}


def _error_message(response: httpx.Response) -> str:
    error = _error_payload(response)
    message = error.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    text = response.text.strip()
    return text or f"HTTP {response.status_code}"


def _is_not_found(response: httpx.Response) -> bool:
    if response.status_code == 404:
        return True
    code = _error_payload(response).get("code")
    return isinstance(code, str) and code in NOT_FOUND_CODES
