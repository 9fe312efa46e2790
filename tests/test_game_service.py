"""
GameShelf Backend — Game Service Unit Tests
=============================================

What:  Tests for GameService validation and identifier resolution.
How:   Uses the mock DB session (no real store); the repository runs on top
       of the mock, so assertions check which session calls were made.

What we test:
    ✅ Missing / blank fields raise ValidationError before any store call
    ✅ Malformed ids raise NotFoundError before any store call
    ✅ Unknown ids raise NotFoundError after the lookup
    ✅ Path id takes precedence over body id on delete
    ✅ SQLAlchemy failures surface as DatabaseError
"""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from gameshelf.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
    GAME_NOT_FOUND,
    MISSING_GAME_ID,
    MISSING_UPDATE_FIELDS,
)
from gameshelf.schemas.game import GameCreate, GameDestroy, GameUpdate
from gameshelf.services.game_service import GameService, parse_game_id


class TestParseGameId:

    def test_valid_uuid(self):
        game_id = uuid.uuid4()
        assert parse_game_id(str(game_id)) == game_id

    def test_hex_form_accepted(self):
        game_id = uuid.uuid4()
        assert parse_game_id(game_id.hex) == game_id

    @pytest.mark.parametrize("raw", ["abcdefg", "jdfjjkbnuohu", "5a0b1c2d3e4f5a6b7c8d9e0f"])
    def test_malformed_raises_not_found(self, raw):
        with pytest.raises(NotFoundError) as exc_info:
            parse_game_id(raw)
        assert exc_info.value.message == GAME_NOT_FOUND


class TestGameServiceCreate:

    def setup_method(self):
        self.service = GameService()

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db_session, sample_game_data):
        game = await self.service.create_game(mock_db_session, GameCreate(**sample_game_data))

        assert game.title == "Donkey Kong"
        assert game.date == "July 1981"
        mock_db_session.add.assert_called_once_with(game)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["title", "date", "genre"])
    async def test_create_missing_field(self, mock_db_session, sample_game_data, missing):
        data = dict(sample_game_data)
        data.pop(missing)

        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_game(mock_db_session, GameCreate(**data))

        assert exc_info.value.fields == [missing]
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_whitespace_field(self, mock_db_session, sample_game_data):
        data = dict(sample_game_data, genre="   ")

        with pytest.raises(ValidationError):
            await self.service.create_game(mock_db_session, GameCreate(**data))

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session, sample_game_data):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

        with pytest.raises(DatabaseError):
            await self.service.create_game(mock_db_session, GameCreate(**sample_game_data))


class TestGameServiceList:

    def setup_method(self):
        self.service = GameService()

    @pytest.mark.asyncio
    async def test_list_returns_scalars(self, mock_db_session):
        games = [MagicMock(title="Donkey Kong"), MagicMock(title="Pac-Man")]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = games
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_games(mock_db_session)

        assert result == games

    @pytest.mark.asyncio
    async def test_list_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("gone"))

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_games(mock_db_session)
        assert exc_info.value.context["operation"] == "list_games"


class TestGameServiceUpdate:

    def setup_method(self):
        self.service = GameService()

    @pytest.mark.asyncio
    async def test_update_sets_title_only(self, mock_db_session):
        game = MagicMock(title="Donkey Kong", date="July 1981", genre="Platformer")
        mock_db_session.get.return_value = game
        game_id = uuid.uuid4()

        result = await self.service.update_game(
            mock_db_session, GameUpdate(id=str(game_id), title="Donkey Kong Country")
        )

        assert result is game
        assert game.title == "Donkey Kong Country"
        assert game.date == "July 1981"
        mock_db_session.get.assert_awaited_once()
        assert mock_db_session.get.await_args.args[1] == game_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{"id": "abc"}, {"title": "x"}, {"id": "", "title": "x"}, {}])
    async def test_update_missing_fields(self, mock_db_session, payload):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_game(mock_db_session, GameUpdate(**payload))

        assert exc_info.value.message == MISSING_UPDATE_FIELDS
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_malformed_id_skips_lookup(self, mock_db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_game(
                mock_db_session, GameUpdate(id="jdfjjkbnuohu", title="Donkey Kong")
            )
        mock_db_session.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_game(
                mock_db_session, GameUpdate(id=str(uuid.uuid4()), title="Donkey Kong")
            )

    def test_numeric_id_coerced_to_string(self):
        assert GameUpdate(id=42, title="x").id == "42"

    def test_object_id_coerced_to_string(self):
        assert GameUpdate(id={"a": 1}, title="x").id == "{'a': 1}"

    def test_boolean_title_stored_as_text(self):
        assert GameUpdate(id="x", title=True).title == "true"


class TestGameServiceDestroy:

    def setup_method(self):
        self.service = GameService()

    @pytest.mark.asyncio
    async def test_destroy_by_path_id(self, mock_db_session):
        game = MagicMock()
        mock_db_session.get.return_value = game
        game_id = uuid.uuid4()

        result = await self.service.destroy_game(mock_db_session, path_id=str(game_id))

        assert result is game
        mock_db_session.delete.assert_awaited_once_with(game)

    @pytest.mark.asyncio
    async def test_destroy_path_takes_precedence(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock()
        path_id = uuid.uuid4()

        await self.service.destroy_game(
            mock_db_session,
            path_id=str(path_id),
            payload=GameDestroy(id=str(uuid.uuid4())),
        )

        assert mock_db_session.get.await_args.args[1] == path_id

    @pytest.mark.asyncio
    async def test_destroy_empty_path_falls_back_to_body(self, mock_db_session):
        mock_db_session.get.return_value = MagicMock()
        body_id = uuid.uuid4()

        await self.service.destroy_game(
            mock_db_session, path_id="", payload=GameDestroy(id=str(body_id))
        )

        assert mock_db_session.get.await_args.args[1] == body_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, GameDestroy(), GameDestroy(id="")])
    async def test_destroy_without_id(self, mock_db_session, payload):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.destroy_game(mock_db_session, payload=payload)

        assert exc_info.value.message == MISSING_GAME_ID

    @pytest.mark.asyncio
    async def test_destroy_unknown_id(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.destroy_game(mock_db_session, path_id=str(uuid.uuid4()))
        mock_db_session.delete.assert_not_awaited()
