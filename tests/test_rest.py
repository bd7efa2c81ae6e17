"""Test the REST mirror, error envelopes and health check."""


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["env"] == "test"


async def test_list_books_envelope(client, library):
    response = await client.get("/api/v1/books", params={"limit": 3})
    assert response.status_code == 200
    body = response.json()
    assert [b["id"] for b in body["data"]] == [1, 2, 3]
    assert body["data"][0]["publishedYear"] == 2022
    assert body["meta"] == {"total": len(library), "page": 1, "limit": 3, "pages": 3}


async def test_list_books_sorted(client, two_books):
    response = await client.get("/api/v1/books", params={"sort": "publishedYear", "order": "asc"})
    assert [b["id"] for b in response.json()["data"]] == [2, 1]


async def test_get_book(client, two_books):
    response = await client.get("/api/v1/books/1")
    assert response.status_code == 200
    assert response.json()["data"] == {
        "id": 1,
        "title": "Spring in Action",
        "author": "Craig Walls",
        "publishedYear": 2022,
    }


async def test_get_missing_book(client, two_books):
    response = await client.get("/api/v1/books/999")
    assert response.status_code == 404
    assert response.json() == {"error": {"code": "NOT_FOUND", "message": "Book '999' not found"}}


async def test_search_by_example(client, library):
    response = await client.post("/api/v1/books/search", json={"author": "jane"})
    assert response.status_code == 200
    body = response.json()
    assert [b["title"] for b in body["data"]] == ["Pride and Prejudice", "Emma"]
    assert body["meta"]["total"] == 2


async def test_search_match_any_with_paging(client, library):
    response = await client.post(
        "/api/v1/books/search",
        params={"matchAny": "true", "limit": 1, "page": 2},
        json={"author": "Walls", "publishedYear": 1813},
    )
    body = response.json()
    assert [b["id"] for b in body["data"]] == [2]
    assert body["meta"] == {"total": 2, "page": 2, "limit": 1, "pages": 2}


async def test_search_without_body_returns_all(client, two_books):
    response = await client.post("/api/v1/books/search")
    assert [b["id"] for b in response.json()["data"]] == [1, 2]


async def test_search_wrong_type(client, two_books):
    response = await client.post("/api/v1/books/search", json={"publishedYear": "2022"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_EXAMPLE"


async def test_search_unknown_field(client, two_books):
    response = await client.post("/api/v1/books/search", json={"isbn": "9781617297571"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_EXAMPLE"


async def test_sort_by_unknown_field(client, two_books):
    response = await client.get("/api/v1/books", params={"sort": "isbn"})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_EXAMPLE"


async def test_get_book_id_beyond_64_bits(client, two_books):
    response = await client.get("/api/v1/books/99999999999999999999")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


async def test_search_id_beyond_64_bits(client, two_books):
    response = await client.post("/api/v1/books/search", json={"id": 99999999999999999999})
    assert response.status_code == 200
    assert response.json()["data"] == []
    assert response.json()["meta"]["total"] == 0


async def test_page_beyond_64_bits(client, two_books):
    response = await client.get("/api/v1/books", params={"page": 10**19})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
