from unittest.mock import MagicMock, patch

import pytest

from lexigem.config.settings import Settings
from lexigem.persistence import connection


class TestConnection:
    def teardown_method(self) -> None:
        connection.close_client()

    def test_get_client_before_init_raises(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            connection.get_client()

    def test_init_requires_url_and_key(self) -> None:
        with pytest.raises(ValueError, match="SUPABASE_URL"):
            connection.init_client(Settings(supabase_url="", supabase_api_key="k"))

    def test_init_creates_client(self) -> None:
        client = MagicMock()
        settings = Settings(supabase_url="https://proj.supabase.co", supabase_api_key="k")
        with patch(
            "lexigem.persistence.connection.create_client", return_value=client
        ) as create:
            connection.init_client(settings)
        create.assert_called_once_with("https://proj.supabase.co", "k")
        assert connection.get_client() is client

    def test_close_drops_client(self) -> None:
        with patch("lexigem.persistence.connection.create_client"):
            connection.init_client(
                Settings(supabase_url="https://proj.supabase.co", supabase_api_key="k")
            )
        connection.close_client()
        with pytest.raises(RuntimeError):
            connection.get_client()
