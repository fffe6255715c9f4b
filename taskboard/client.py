"""
Thin HTTP client for the taskboard API.

    with TodoClient() as api:
        api.add_todo(TodoCreate(name="Dentist", short_description="Checkup",
                                date_time="2026-11-02T09:30:00Z"))
        for todo in api.get_todos(TodoFilter(filter="upcoming")):
            print(todo.name)
"""

import logging
import time

import httpx

from taskboard.schemas import TodoCreate, TodoFilter, TodoResponse, TodoUpdate

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:4000/api"


class TodoApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TodoClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.retry_delay = retry_delay
        self._http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "TodoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.NetworkError as exc:
            # one retry for flaky connections; timeouts are not retried
            logger.warning("%s %s failed (%s), retrying once", method, url, exc)
            time.sleep(self.retry_delay)
            response = self._http.request(method, url, **kwargs)

        if response.is_error:
            raise TodoApiError(response.status_code, _error_message(response))
        return response

    def get_todos(self, filters: TodoFilter | None = None) -> list[TodoResponse]:
        params = {}
        if filters is not None:
            params = filters.model_dump(mode="json", exclude_none=True)
        response = self._request("GET", "/todos", params=params)
        return [TodoResponse.model_validate(item) for item in response.json()]

    def get_categories(self) -> list[str]:
        return self._request("GET", "/categories").json()

    def add_todo(self, data: TodoCreate) -> TodoResponse:
        payload = data.model_dump(mode="json", by_alias=True)
        response = self._request("POST", "/todos", json=payload)
        return TodoResponse.model_validate(response.json())

    def update_todo(self, todo_id: int, data: TodoUpdate) -> TodoResponse:
        payload = data.model_dump(mode="json", by_alias=True, exclude_unset=True)
        response = self._request("PUT", f"/todos/{todo_id}", json=payload)
        return TodoResponse.model_validate(response.json())

    def delete_todo(self, todo_id: int) -> bool:
        return self._request("DELETE", f"/todos/{todo_id}").json()["success"]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text
