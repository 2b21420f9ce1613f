import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0


class ApiRequestError(Exception):
    """Raised for any failed API call."""

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data


@dataclass
class Session:
    """Token and user returned by login or register."""

    token: Optional[str] = None
    user: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def role(self) -> Optional[str]:
        return self.user.get("role")

    def clear(self) -> None:
        self.token = None
        self.user = {}


class AdminClient:
    """Thin wrapper over the REST endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        session: Optional[Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or Session()
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay
        self.http = http or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def request(self, method: str, path: str, json: Any = None) -> requests.Response:
        """Send a single request and raise ApiRequestError on failure."""
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method, url, json=json, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ApiRequestError(str(e)) from e

        if response.status_code == 401:
            # The server no longer accepts our credentials.
            self.session.clear()

        if response.status_code >= 400:
            try:
                data = response.json()
            except ValueError:
                data = None
            message = data.get("error") if isinstance(data, dict) else None
            raise ApiRequestError(
                message or f"HTTP {response.status_code}",
                status=response.status_code,
                data=data,
            )
        return response

    def fetch_with_retry(self, method: str, path: str, json: Any = None,
                         retries: Optional[int] = None) -> requests.Response:
        """Like ``request`` but retries server errors a fixed number of times."""
        remaining = self.retries if retries is None else retries
        while True:
            try:
                return self.request(method, path, json=json)
            except ApiRequestError as e:
                if remaining <= 0 or e.status is None or e.status < 500:
                    raise
                remaining -= 1
                logger.warning(
                    "%s %s failed with %s, retrying in %ss (%d left)",
                    method, path, e.status, self.retry_delay, remaining,
                )
                time.sleep(self.retry_delay)

    def _get(self, path: str) -> Any:
        return self.fetch_with_retry("GET", path).json()

    def _start_session(self, data: Dict[str, Any]) -> Session:
        self.session.token = data["token"]
        self.session.user = data["user"]
        return self.session

    def login(self, username: str, password: str) -> Session:
        data = self.request("POST", "/login", {"username": username, "password": password}).json()
        return self._start_session(data)

    def register(self, username: str, email: str, password: str,
                 confirm_password: Optional[str] = None) -> Session:
        payload = {
            "username": username,
            "email": email,
            "password": password,
            "confirm_password": password if confirm_password is None else confirm_password,
        }
        return self._start_session(self.request("POST", "/register", payload).json())

    def logout(self) -> None:
        self.session.clear()

    def list_products(self) -> List[Dict[str, Any]]:
        return self._get("/products")

    def create_product(self, name: str, price: float, stock: int, category: str) -> Dict[str, Any]:
        payload = {"name": name, "price": price, "stock": stock, "category": category}
        return self.request("POST", "/products", payload).json()

    def update_product(self, product_id: int, **fields) -> Dict[str, Any]:
        return self.request("PUT", f"/products/{product_id}", fields).json()

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        return self.request("DELETE", f"/products/{product_id}").json()

    def list_orders(self) -> List[Dict[str, Any]]:
        return self._get("/orders")

    def create_order(self, product_id: int, quantity: int, customer_name: str,
                     customer_email: str) -> Dict[str, Any]:
        payload = {
            "product_id": product_id,
            "quantity": quantity,
            "customer_name": customer_name,
            "customer_email": customer_email,
        }
        return self.request("POST", "/orders", payload).json()

    def delete_order(self, order_id: int) -> Dict[str, Any]:
        return self.request("DELETE", f"/orders/{order_id}").json()

    def list_users(self) -> List[Dict[str, Any]]:
        return self._get("/users")

    def dashboard_summary(self) -> Dict[str, Any]:
        return self._get("/dashboard-summary")

    def sales_charts(self) -> List[Dict[str, Any]]:
        return self._get("/sales-charts")

    def health(self) -> Dict[str, Any]:
        return self._get("/health")
