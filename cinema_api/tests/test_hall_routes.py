import io

from PIL import Image

from cinema_api.api import routes_hall
from cinema_api.core.exceptions import EncodingError
from cinema_api.services.hall_diagram import image_size


async def test_hall_defaults(client):
    response = await client.get("/hall")
    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    img = Image.open(io.BytesIO(response.content))
    assert img.size == image_size(8, 12)


async def test_hall_custom_grid(client):
    response = await client.get("/hall", params={"rows": 3, "cols": 4, "occupiedPct": 50})
    assert response.status_code == 200
    assert Image.open(io.BytesIO(response.content)).size == image_size(3, 4)


async def test_hall_bad_values_fall_back_per_parameter(client):
    response = await client.get("/hall", params={"rows": "3", "cols": "abc", "occupiedPct": "-5"})
    assert response.status_code == 200
    assert Image.open(io.BytesIO(response.content)).size == image_size(3, 12)

    response = await client.get("/hall", params={"rows": "0", "cols": "5"})
    assert Image.open(io.BytesIO(response.content)).size == image_size(8, 5)


async def test_hall_large_grid_is_honoured(client):
    response = await client.get("/hall", params={"rows": 27, "cols": 4})
    assert response.status_code == 200
    assert Image.open(io.BytesIO(response.content)).size == image_size(27, 4) == (422, 1168)


async def test_hall_encoding_failure_is_500(client, monkeypatch):
    def broken_encode(img):
        raise EncodingError("failed to generate image")

    monkeypatch.setattr(routes_hall, "encode_png", broken_encode)
    response = await client.get("/hall")
    assert response.status_code == 500
    assert response.json() == {"error": "failed to generate image"}
