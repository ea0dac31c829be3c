"""HTTP API tests against an in-process app."""


async def _wrestler(client, name, gender="Male"):
    response = await client.post("/api/wrestlers", json={"name": name, "gender": gender})
    assert response.status_code == 201
    return response.json()


async def _show(client, name):
    response = await client.post("/api/shows", json={"name": name})
    assert response.status_code == 201
    return response.json()


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_ready(self, client):
        response = await client.get("/ready")

        assert response.status_code == 200


class TestWrestlerEndpoints:
    async def test_create_and_fetch(self, client):
        created = await _wrestler(client, "Rhea Ripley", "Female")

        response = await client.get(f"/api/wrestlers/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Rhea Ripley"
        assert body["gender"] == "Female"
        assert body["strength"] == 5

    async def test_rating_validated(self, client):
        wrestler = await _wrestler(client, "Gunther")

        response = await client.put(
            f"/api/wrestlers/{wrestler['id']}/power-ratings", json={"speed": 11}
        )

        assert response.status_code == 422

    async def test_unknown_wrestler(self, client):
        response = await client.get("/api/wrestlers/9999")

        assert response.status_code == 404
        assert response.json()["kind"] == "not_found"

    async def test_signature_move_limit(self, client):
        wrestler = await _wrestler(client, "Gunther")
        url = f"/api/wrestlers/{wrestler['id']}/signature-moves"
        for name in ("Powerbomb", "Sleeper"):
            response = await client.post(url, json={"move_name": name, "move_type": "primary"})
            assert response.status_code == 201

        response = await client.post(url, json={"move_name": "Lariat", "move_type": "primary"})

        assert response.status_code == 409


class TestRosterEndpoints:
    async def test_assign_moves_between_shows(self, client):
        wrestler = await _wrestler(client, "Cody Rhodes")
        raw = await _show(client, "Raw")
        smackdown = await _show(client, "SmackDown")

        await client.put(f"/api/shows/{raw['id']}/roster/{wrestler['id']}")
        response = await client.put(f"/api/shows/{smackdown['id']}/roster/{wrestler['id']}")

        assert response.status_code == 200
        active = await client.get(f"/api/wrestlers/{wrestler['id']}/show")
        assert active.json() == {"wrestler_id": wrestler["id"], "show_id": smackdown["id"]}
        assert (await client.get(f"/api/shows/{raw['id']}/roster")).json() == []

    async def test_release(self, client):
        wrestler = await _wrestler(client, "Cody Rhodes")
        raw = await _show(client, "Raw")
        await client.put(f"/api/shows/{raw['id']}/roster/{wrestler['id']}")

        response = await client.delete(f"/api/shows/{raw['id']}/roster/{wrestler['id']}")

        assert response.json()["released"] is True
        unassigned = await client.get("/api/wrestlers/unassigned")
        assert [w["id"] for w in unassigned.json()] == [wrestler["id"]]


class TestTitleAndMatchEndpoints:
    async def test_title_match_changes_champion(self, client):
        champion = await _wrestler(client, "Cody Rhodes")
        challenger = await _wrestler(client, "Seth Rollins")
        raw = await _show(client, "Raw")
        title = (
            await client.post(
                "/api/titles", json={"name": "World Heavyweight Championship"}
            )
        ).json()
        assert title["prestige_tier"] == 1

        crowned = await client.post(
            f"/api/titles/{title['id']}/crown", json={"wrestler_id": champion["id"]}
        )
        assert crowned.status_code == 201

        match = (
            await client.post(
                f"/api/shows/{raw['id']}/matches",
                json={
                    "match_type": "Singles",
                    "participants": [
                        {"wrestler_id": champion["id"]},
                        {"wrestler_id": challenger["id"]},
                    ],
                    "title_id": title["id"],
                },
            )
        ).json()
        assert match["status"] == "Scheduled"
        assert match["is_title_match"] is True

        result = await client.post(
            f"/api/matches/{match['id']}/result", json={"winner_id": challenger["id"]}
        )

        assert result.status_code == 200
        body = result.json()
        assert body["title_changed"] is True
        assert body["match"]["status"] == "Resolved"
        assert body["new_reign"]["wrestler_id"] == challenger["id"]

        holder = await client.get(f"/api/titles/{title['id']}/holder")
        assert holder.json()["wrestler_id"] == challenger["id"]
        history = await client.get(f"/api/titles/{title['id']}/history")
        assert len(history.json()) == 2

        again = await client.post(
            f"/api/matches/{match['id']}/result", json={"winner_id": champion["id"]}
        )
        assert again.status_code == 409
        assert again.json()["kind"] == "already_resolved"

    async def test_winner_not_in_match(self, client):
        first = await _wrestler(client, "Cody Rhodes")
        outsider = await _wrestler(client, "Seth Rollins")
        raw = await _show(client, "Raw")
        match = (
            await client.post(
                f"/api/shows/{raw['id']}/matches",
                json={"participants": [{"wrestler_id": first["id"]}]},
            )
        ).json()

        response = await client.post(
            f"/api/matches/{match['id']}/result", json={"winner_id": outsider["id"]}
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "invalid_participant"

    async def test_empty_card_rejected(self, client):
        raw = await _show(client, "Raw")

        response = await client.post(
            f"/api/shows/{raw['id']}/matches", json={"participants": []}
        )

        assert response.status_code == 422

    async def test_retired_title_cannot_change_hands(self, client):
        wrestler = await _wrestler(client, "Cody Rhodes")
        title = (await client.post("/api/titles", json={"name": "Cruiserweight"})).json()
        await client.put(f"/api/titles/{title['id']}/active", json={"is_active": False})

        response = await client.post(
            f"/api/titles/{title['id']}/crown", json={"wrestler_id": wrestler["id"]}
        )

        assert response.status_code == 409
        assert response.json()["kind"] == "invalid_state"

    async def test_show_titles_with_champions(self, client):
        wrestler = await _wrestler(client, "Rhea Ripley", "Female")
        raw = await _show(client, "Raw")
        title = (
            await client.post(
                "/api/titles",
                json={"name": "Women's World Championship", "show_id": raw["id"]},
            )
        ).json()
        await client.post(
            f"/api/titles/{title['id']}/crown", json={"wrestler_id": wrestler["id"]}
        )

        response = await client.get(f"/api/shows/{raw['id']}/titles")

        assert response.status_code == 200
        [standing] = response.json()
        assert standing["title"]["id"] == title["id"]
        assert standing["holder_name"] == "Rhea Ripley"
        assert standing["days_held"] == 0
