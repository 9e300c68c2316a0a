from __future__ import annotations

import asyncio
import logging
import mimetypes
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from church_admin.client.errors import ApiError, BatchOperationError, SessionExpiredError
from church_admin.client.query import MemberQuery
from church_admin.client.session import AdminSession

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"


@dataclass
class UploadProgress:
    filename: str
    status: str = "pending"  # pending | uploading | done | failed
    url: str | None = None
    error: str | None = None


@dataclass
class UploadBatchResult:
    progress: list[UploadProgress]
    album: dict[str, Any] | None = None

    @property
    def urls(self) -> list[str]:
        return [item.url for item in self.progress if item.url]

    @property
    def failed(self) -> list[UploadProgress]:
        return [item for item in self.progress if item.status == "failed"]


def _error_message(resp: httpx.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if isinstance(detail, str):
        return detail
    if detail is not None:
        return str(detail)
    return resp.reason_phrase


class AdminClient:
    """
    Thin client for the admin API.

    Any 401 outside of login tears the session down and raises
    SessionExpiredError; other non-2xx responses raise ApiError.
    """

    def __init__(
        self,
        base_url: str,
        session: AdminSession | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        async_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or AdminSession()
        self.timeout = timeout
        self._transport = transport
        self._async_transport = async_transport

    def _check(self, resp: httpx.Response, path: str) -> Any:
        if resp.status_code == 401 and path != LOGIN_PATH:
            self.session.teardown()
            raise SessionExpiredError()
        if resp.is_error:
            raise ApiError(resp.status_code, _error_message(resp))
        if not resp.content:
            return None
        return resp.json()

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
            resp = client.request(method, path, json=json, params=params, files=files, headers=self.session.headers())
        return self._check(resp, path)

    async def _arequest(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        *,
        json: Any = None,
        files: dict[str, Any] | None = None,
    ) -> Any:
        resp = await client.request(method, path, json=json, files=files, headers=self.session.headers())
        return self._check(resp, path)

    def _async_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self._async_transport)

    # auth

    def login(self, identifier: str, password: str) -> dict[str, Any]:
        data = self.request("POST", LOGIN_PATH, json={"identifier": identifier, "password": password})
        self.session.init(data["token"], data["user"])
        return data["user"]

    def logout(self) -> None:
        self.session.teardown()

    # members

    def list_members(self, query: MemberQuery | None = None) -> dict[str, Any]:
        return self.request("GET", "/admin/members", params=(query or MemberQuery()).params())

    def get_member(self, member_id: int) -> dict[str, Any]:
        return self.request("GET", f"/admin/members/{member_id}")

    def create_member(self, data: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", "/admin/members", json=data)

    def update_member(self, member_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self.request("PUT", f"/admin/members/{member_id}", json=data)

    def delete_members(self, member_ids: list[int]) -> dict[str, Any]:
        return self.request("POST", "/admin/members/delete-bulk", json={"ids": member_ids})

    def approve_member(self, member_id: int) -> dict[str, Any]:
        return self.request("POST", f"/admin/members/{member_id}/approve")

    # families and houses

    def get_family(self, family_id: int) -> dict[str, Any]:
        return self.request("GET", f"/admin/families/{family_id}")

    def create_family(self, data: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", "/admin/families", json=data)

    def link_related_family(self, family_id: int, related_family_id: int) -> dict[str, Any]:
        return self.request(
            "POST", f"/admin/families/{family_id}/related", json={"related_family_id": related_family_id}
        )

    def unlink_related_family(self, family_id: int, related_family_id: int) -> dict[str, Any]:
        return self.request("DELETE", f"/admin/families/{family_id}/related/{related_family_id}")

    def create_house(self, data: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", "/admin/houses", json=data)

    def assign_member_to_family(
        self,
        member_id: int,
        family_id: int,
        house_id: int | None = None,
        family_role: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"family_id": family_id, "house_id": house_id}
        if family_role is not None:
            body["family_role"] = family_role
        return self.request("POST", f"/admin/members/{member_id}/family", json=body)

    def remove_member_from_family(self, member_id: int) -> dict[str, Any]:
        return self.request("DELETE", f"/admin/members/{member_id}/family")

    def set_head_of_family(self, member_id: int, family_id: int) -> dict[str, Any]:
        return self.request("POST", f"/admin/members/{member_id}/set-head", json={"family_id": family_id})

    async def assign_members_async(
        self,
        family_id: int,
        member_ids: list[int],
        house_id: int | None = None,
    ) -> list[int]:
        """
        Move each member into the family with one update call per member, in parallel.

        Calls that succeed stay applied even when others fail.
        """
        async with self._async_client() as client:
            results = await asyncio.gather(
                *[
                    self._arequest(
                        client,
                        "PUT",
                        f"/admin/members/{member_id}",
                        json={"family_id": family_id, "house_id": house_id},
                    )
                    for member_id in member_ids
                ],
                return_exceptions=True,
            )

        succeeded: list[int] = []
        failed: dict[int, Exception] = {}
        for member_id, result in zip(member_ids, results):
            if isinstance(result, SessionExpiredError):
                raise result
            if isinstance(result, Exception):
                failed[member_id] = result
            else:
                succeeded.append(member_id)
        if failed:
            logger.warning("assigning members to family %s: %d of %d failed", family_id, len(failed), len(member_ids))
            raise BatchOperationError("failed to add members to family", succeeded, failed)
        return succeeded

    def assign_members(self, family_id: int, member_ids: list[int], house_id: int | None = None) -> list[int]:
        return asyncio.run(self.assign_members_async(family_id, member_ids, house_id))

    # gallery

    def upload_image(self, path: Path) -> str:
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        data = self.request("POST", "/common/upload", files={"image": (path.name, path.read_bytes(), content_type)})
        return data["url"]

    def add_album_images(self, album_id: int, urls: list[str]) -> dict[str, Any]:
        return self.request("POST", f"/admin/gallery/albums/{album_id}/images", json={"urls": urls})

    async def upload_album_images_async(
        self,
        album_id: int,
        paths: list[Path],
        on_progress: Callable[[UploadProgress], None] | None = None,
    ) -> UploadBatchResult:
        """
        Upload files concurrently, then link every successful URL to the album in one call.

        Each file keeps its own progress record; a failed upload does not stop the others.
        """
        progress = [UploadProgress(filename=Path(path).name) for path in paths]

        def report(item: UploadProgress) -> None:
            if on_progress is not None:
                on_progress(item)

        async def upload_one(client: httpx.AsyncClient, path: Path, item: UploadProgress) -> None:
            item.status = "uploading"
            report(item)
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
            try:
                data = await self._arequest(
                    client,
                    "POST",
                    "/common/upload",
                    files={"image": (path.name, path.read_bytes(), content_type)},
                )
            except SessionExpiredError:
                item.status = "failed"
                item.error = "session expired"
                report(item)
                raise
            except (ApiError, httpx.HTTPError, OSError) as exc:
                item.status = "failed"
                item.error = str(exc)
                report(item)
                return
            item.status = "done"
            item.url = data["url"]
            report(item)

        async with self._async_client() as client:
            outcomes = await asyncio.gather(
                *[upload_one(client, Path(path), item) for path, item in zip(paths, progress)],
                return_exceptions=True,
            )

        errors = [outcome for outcome in outcomes if isinstance(outcome, Exception)]
        for error in errors:
            if isinstance(error, SessionExpiredError):
                raise error
        if errors:
            raise errors[0]

        result = UploadBatchResult(progress=progress)
        if result.urls:
            result.album = self.add_album_images(album_id, result.urls)
        return result

    def upload_album_images(
        self,
        album_id: int,
        paths: list[Path],
        on_progress: Callable[[UploadProgress], None] | None = None,
    ) -> UploadBatchResult:
        return asyncio.run(self.upload_album_images_async(album_id, paths, on_progress))
