"""Model Store API client.

A thin wrapper around the service's ``/model`` endpoints built on the
``requests`` library.  Every method returns a tuple ``(data, error)``:
``data`` holds the decoded JSON response on success and ``error`` is
``None``; on failure ``data`` is empty and ``error`` is a dictionary
with ``status_code`` and ``message`` keys.

* :meth:`ModelStoreAPI.list_models` – return all stored models.
* :meth:`ModelStoreAPI.create_model` – create a model record.
* :meth:`ModelStoreAPI.delete_model` – delete a model record by ID.

The module doubles as a small command line tool::

    python model_store_client.py create --name m1 --version v1 --data abc
    python model_store_client.py list
    python model_store_client.py delete --id <model id>
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:3000"
MODEL_PATH = "/model"


class ModelStoreAPI:
    """Client for the model store service."""

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the service, e.g. ``http://127.0.0.1:3000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
        """Perform an HTTP request and decode the JSON response."""
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = str(err_json.get("detail") or err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def list_models(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve every stored model."""
        data, error = self._request("GET", MODEL_PATH)
        if error:
            return [], error
        if isinstance(data, list):
            return data, None
        return [], None

    def create_model(self, name: str, version: str, data: str) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Create a model record.  Returns the server's confirmation string."""
        return self._request(
            "POST",
            MODEL_PATH,
            json_body={"name": name, "version": version, "data": data},
        )

    def delete_model(self, model_id: str) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
        """Delete a model record by ID.  Unknown IDs still succeed."""
        return self._request("DELETE", MODEL_PATH, json_body={"id": model_id})


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Talk to a running Model Store API.")
    ap.add_argument("--url", default=DEFAULT_BASE_URL, help=f"Service base URL (default: {DEFAULT_BASE_URL})")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all models")

    create = sub.add_parser("create", help="Create a model")
    create.add_argument("--name", required=True)
    create.add_argument("--version", required=True)
    create.add_argument("--data", required=True, help="Payload text")

    delete = sub.add_parser("delete", help="Delete a model by ID")
    delete.add_argument("--id", required=True, dest="model_id")

    args = ap.parse_args(argv)
    client = ModelStoreAPI(base_url=args.url)

    if args.command == "list":
        result, error = client.list_models()
    elif args.command == "create":
        result, error = client.create_model(args.name, args.version, args.data)
    else:
        result, error = client.delete_model(args.model_id)

    if error:
        print(f"[!] {error['message']}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
