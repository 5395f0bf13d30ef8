"""
E2E Tests for Get Endpoint: GET /{key}
"""

import io

from PIL import Image


class TestGetEndpoint:
    def test_get_returns_uploaded_bytes(self, api_client, sample_png) -> None:
        key = api_client.upload(sample_png).text

        response = api_client.get(key)

        assert response.status_code == 200
        assert response.content == sample_png
        assert response.headers["Content-Type"] == "image/png"
        assert response.headers["Cache-Control"] == "public, max-age=2592000"

    def test_get_unknown_key(self, api_client) -> None:
        response = api_client.get("1999/01/01/zzzzzz.png")

        assert response.status_code == 404

    def test_get_resized_webp(self, api_client, sample_png) -> None:
        key = api_client.upload(sample_png).text

        response = api_client.get(key, params={"width": "32"}, headers={"Accept": "image/webp"})

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "image/webp"
        assert Image.open(io.BytesIO(response.content)).size == (32, 16)

    def test_invalid_query_returns_original(self, api_client, sample_png) -> None:
        key = api_client.upload(sample_png).text

        response = api_client.get(key, params={"width": "abc"})

        assert response.status_code == 200
        assert response.content == sample_png
