"""Unit tests for the Supabase Storage client."""

import httpx
import pytest

from audioscribe.core.exceptions import StorageError
from audioscribe.services.storage_service import StorageService, generate_object_key


def make_service(test_settings, handler) -> StorageService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StorageService(test_settings, client)


class TestObjectKey:

    def test_timestamp_prefixed_key(self):
        assert generate_object_key("memo.mp3", now=1700000000.123) == "audio/1700000000123_memo.mp3"

    def test_defaults_to_current_time(self):
        key = generate_object_key("memo.mp3")
        prefix, name = key.split("_", 1)
        assert prefix.startswith("audio/")
        assert prefix[len("audio/"):].isdigit()
        assert name == "memo.mp3"


@pytest.mark.asyncio
class TestStorageService:

    async def test_upload_request_and_public_url(self, test_settings):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"Key": "recordings/" + request.url.path.split("/recordings/", 1)[1]})

        service = make_service(test_settings, handler)
        url = await service.store(b"ID3audio", "memo.mp3", "audio/mpeg")

        request = seen["request"]
        assert request.method == "POST"
        assert request.url.host == "project.supabase.co"
        assert request.url.path.startswith("/storage/v1/object/recordings/audio/")
        assert request.url.path.endswith("_memo.mp3")
        assert request.headers["apikey"] == "test-supabase-key"
        assert request.headers["Authorization"] == "Bearer test-supabase-key"
        assert request.headers["Content-Type"] == "audio/mpeg"
        assert request.headers["x-upsert"] == "false"
        assert request.content == b"ID3audio"

        assert url.startswith("https://project.supabase.co/storage/v1/object/public/recordings/audio/")
        assert url.endswith("_memo.mp3")

    async def test_filename_is_quoted_in_url(self, test_settings):
        service = make_service(test_settings, lambda request: httpx.Response(200, json={}))
        url = await service.store(b"data", "my memo.mp3", "audio/mpeg")
        assert url.endswith("_my%20memo.mp3")

    async def test_provider_error(self, test_settings):
        def handler(request):
            return httpx.Response(400, json={"statusCode": "404", "error": "Bucket not found", "message": "Bucket not found"})

        service = make_service(test_settings, handler)
        with pytest.raises(StorageError) as exc_info:
            await service.store(b"data", "memo.mp3", "audio/mpeg")
        assert exc_info.value.message == "Bucket not found"

    async def test_transport_failure(self, test_settings):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        service = make_service(test_settings, handler)
        with pytest.raises(StorageError):
            await service.store(b"data", "memo.mp3", "audio/mpeg")
