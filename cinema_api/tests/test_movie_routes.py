import uuid


async def test_create_movie(client):
    response = await client.post("/movies", json={
        "title": "Interstellar",
        "description": "A group of explorers travel through a wormhole in space.",
    })
    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "title", "description", "createdAt"}
    assert body["title"] == "Interstellar"
    assert uuid.UUID(body["id"])


async def test_create_movie_with_poster_and_genres(client, seeded_genres):
    response = await client.post("/movies", json={
        "title": "Toy Story",
        "description": "Toys come alive.",
        "posterUrl": "https://img.example/toy-story.jpg",
        "genreIds": [seeded_genres["Animation"], seeded_genres["Comedy"]],
    })
    assert response.status_code == 201
    body = response.json()
    assert body["posterUrl"] == "https://img.example/toy-story.jpg"
    assert "genres" not in body


async def test_create_movie_invalid_json(client):
    response = await client.post("/movies", content="{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert "error" in response.json()


async def test_create_movie_missing_field(client):
    response = await client.post("/movies", json={"title": "No description"})
    assert response.status_code == 400


async def test_create_movie_blank_title(client):
    response = await client.post("/movies", json={"title": "   ", "description": "desc"})
    assert response.status_code == 400
    assert response.json() == {"error": "title and description are required"}


async def test_create_movie_malformed_genre(client):
    response = await client.post("/movies", json={"title": "t", "description": "d", "genreIds": ["abc"]})
    assert response.status_code == 400
    assert response.json() == {"error": "one or more genreIds are not valid UUIDs"}


async def test_create_movie_unknown_genre(client, seeded_genres):
    response = await client.post("/movies", json={
        "title": "t",
        "description": "d",
        "genreIds": [str(uuid.uuid4())],
    })
    assert response.status_code == 400
    assert response.json() == {"error": "one or more genreIds do not exist"}

    listed = await client.get("/movies")
    assert listed.json() == []


async def test_list_movies_includes_genres(client, seeded_genres):
    await client.post("/movies", json={"title": "Plain", "description": "No genres"})
    await client.post("/movies", json={
        "title": "Scary",
        "description": "Boo",
        "genreIds": [seeded_genres["Thriller"], seeded_genres["Horror"]],
    })

    response = await client.get("/movies")
    assert response.status_code == 200
    movies = {m["title"]: m for m in response.json()}
    assert movies["Plain"]["genres"] == []
    assert [g["name"] for g in movies["Scary"]["genres"]] == ["Horror", "Thriller"]
    assert movies["Scary"]["genres"][0]["id"] == seeded_genres["Horror"]
    assert "posterUrl" not in movies["Plain"]


async def test_delete_movie(client):
    created = (await client.post("/movies", json={"title": "t", "description": "d"})).json()

    response = await client.delete(f"/movies/{created['id']}")
    assert response.status_code == 204
    assert response.content == b""
    assert (await client.get("/movies")).json() == []

    response = await client.delete(f"/movies/{created['id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "movie not found"}


async def test_delete_movie_with_showtimes(client, showtimes_table):
    created = (await client.post("/movies", json={"title": "t", "description": "d"})).json()
    await showtimes_table(created["id"])

    response = await client.delete(f"/movies/{created['id']}")
    assert response.status_code == 409
    assert "dependent records" in response.json()["error"]
    assert [m["id"] for m in (await client.get("/movies")).json()] == [created["id"]]


async def test_request_id_header(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-request-id"] == "abc123"


async def test_db_health(client):
    response = await client.get("/health/db")
    assert response.status_code == 200


async def test_create_movie_blank_or_padded_genre_id(client, seeded_genres):
    for bad_id in ["", f"  {seeded_genres['Drama']} "]:
        response = await client.post("/movies", json={"title": "t", "description": "d", "genreIds": [bad_id]})
        assert response.status_code == 400, bad_id
        assert response.json() == {"error": "one or more genreIds are not valid UUIDs"}
    assert (await client.get("/movies")).json() == []


async def test_created_at_matches_between_create_and_list(client):
    created = (await client.post("/movies", json={"title": "t", "description": "d"})).json()
    [listed] = (await client.get("/movies")).json()
    assert listed["createdAt"] == created["createdAt"]
