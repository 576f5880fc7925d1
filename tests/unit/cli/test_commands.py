"""Unit tests for CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from arky import __version__
from arky.cli.main import app
from arky.core.config import config_path, load_config_file

runner = CliRunner()

BIZ = ["--business-id", "biz_1"]

GROUPS = [
    "auth", "config", "business", "node", "product", "order", "workflow",
    "service", "provider", "booking", "db", "media", "audience", "promo-code",
    "shipping", "event", "account", "platform", "network", "notification", "agent",
]


class TestMainApp:
    """Tests for main app options."""

    def test_help(self) -> None:
        """Test main help."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Arky CLI" in result.stdout

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == f"arky {__version__}"

    @pytest.mark.parametrize("group", GROUPS)
    def test_group_help(self, group: str) -> None:
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0
        assert "Usage" in result.stdout

    def test_verbose_and_debug_flags_are_accepted(self, mock_api) -> None:
        result = runner.invoke(app, ["-v", "-d", "platform", "currencies"])
        assert result.exit_code == 0

    def test_node_create_help_documents_blocks(self) -> None:
        result = runner.invoke(app, ["node", "create", "--help"])
        assert result.exit_code == 0
        assert "localized_text" in result.stdout
        assert "relationship_media" in result.stdout
        assert "@content.json" in result.stdout


class TestBusinessScope:
    """Tests for commands that need a business id."""

    def test_missing_business_id_fails_before_request(self, mock_api) -> None:
        result = runner.invoke(app, ["node", "list"])

        assert result.exit_code == 1
        assert "Config error: business_id required" in result.output
        assert mock_api.requests == []

    def test_business_id_from_env(self, mock_api, monkeypatch) -> None:
        monkeypatch.setenv("ARKY_BUSINESS_ID", "env_biz")

        result = runner.invoke(app, ["product", "get", "p1"])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/businesses/env_biz/products/p1"

    def test_platform_commands_need_no_business(self, mock_api) -> None:
        mock_api.body = [{"code": "usd"}]

        result = runner.invoke(app, ["platform", "currencies"])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/platform/currencies"
        assert json.loads(result.stdout) == [{"code": "usd"}]


class TestNodeCommands:
    """Tests for content node commands."""

    def test_get(self, mock_api) -> None:
        mock_api.body = {"id": "n1", "key": "home"}

        result = runner.invoke(app, [*BIZ, "node", "get", "n1"])

        assert result.exit_code == 0
        assert mock_api.last.method == "GET"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/nodes/n1"
        assert json.loads(result.stdout) == {"id": "n1", "key": "home"}

    def test_list_query_parameters(self, mock_api) -> None:
        result = runner.invoke(
            app,
            [*BIZ, "node", "list", "--type", "blog", "--limit", "5", "--sort-field", "createdAt"],
        )

        assert result.exit_code == 0
        assert mock_api.last.url.params.multi_items() == [
            ("limit", "5"),
            ("type", "blog"),
            ("sortField", "createdAt"),
        ]

    def test_list_default_limit(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "node", "list"])

        assert mock_api.last.url.params.multi_items() == [("limit", "20")]

    def test_create_merges_data_over_defaults(self, mock_api) -> None:
        result = runner.invoke(
            app,
            [*BIZ, "node", "create", "post", "--parent-id", "p1", "--data", '{"status": "draft", "blocks": []}'],
        )

        assert result.exit_code == 0
        assert mock_api.last.method == "POST"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/nodes"
        assert mock_api.last_json() == {"key": "post", "parentId": "p1", "status": "draft", "blocks": []}

    def test_create_data_from_stdin(self, mock_api) -> None:
        result = runner.invoke(
            app,
            [*BIZ, "node", "create", "post", "--data", "-"],
            input='{"blocks": [{"key": "title", "type": "text", "value": "Hi"}]}',
        )

        assert result.exit_code == 0
        assert mock_api.last_json()["blocks"][0]["value"] == "Hi"

    def test_update_data_from_file(self, mock_api, tmp_path) -> None:
        data_file = tmp_path / "blocks.json"
        data_file.write_text('{"status": "active"}', encoding="utf-8")

        result = runner.invoke(app, [*BIZ, "node", "update", "n1", "--data", f"@{data_file}"])

        assert result.exit_code == 0
        assert mock_api.last.method == "PUT"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/nodes/n1"
        assert mock_api.last_json() == {"id": "n1", "status": "active"}

    def test_delete_prints_result_and_ok(self, mock_api) -> None:
        mock_api.body = {"deleted": True}

        result = runner.invoke(app, [*BIZ, "node", "delete", "n1"])

        assert result.exit_code == 0
        assert mock_api.last.method == "DELETE"
        assert '"deleted": true' in result.output
        assert "OK Node deleted" in result.output

    def test_children(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "node", "children", "n1", "--cursor", "c2"])

        assert mock_api.last.url.path == "/v1/businesses/biz_1/nodes/n1/children"
        assert mock_api.last.url.params.multi_items() == [("limit", "20"), ("cursor", "c2")]

    def test_non_object_data_is_rejected(self, mock_api) -> None:
        result = runner.invoke(app, [*BIZ, "node", "create", "post", "--data", "[1, 2]"])

        assert result.exit_code == 1
        assert "Invalid input: --data must be a JSON object, got array" in result.output
        assert mock_api.requests == []

    def test_non_standard_json_constant_is_rejected(self, mock_api) -> None:
        result = runner.invoke(app, [*BIZ, "node", "update", "n1", "--data", '{"price": NaN}'])

        assert result.exit_code == 1
        assert "ERROR Invalid input: Invalid JSON: NaN is not valid JSON" in result.output
        assert mock_api.requests == []

    def test_invalid_json_is_rejected(self, mock_api) -> None:
        result = runner.invoke(app, [*BIZ, "node", "update", "n1", "--data", "{nope"])

        assert result.exit_code == 1
        assert "Invalid input: Invalid JSON" in result.output
        assert mock_api.requests == []


class TestErrors:
    """Tests for error reporting through the command runner."""

    def test_api_error_exits_1_with_validation_lines(self, mock_api) -> None:
        mock_api.status_code = 422
        mock_api.body = {
            "message": "Validation failed",
            "validationErrors": [{"field": "key", "error": "is required"}],
        }

        result = runner.invoke(app, [*BIZ, "product", "create", "shirt"])

        assert result.exit_code == 1
        assert "ERROR API error (422): Validation failed" in result.output
        assert "  - key: is required" in result.output

    def test_raw_error_body(self, mock_api) -> None:
        mock_api.status_code = 502
        mock_api.body = "Bad Gateway"

        result = runner.invoke(app, ["platform", "countries"])

        assert result.exit_code == 1
        assert "API error (502): Bad Gateway" in result.output


class TestOutputFormats:
    def test_plain_format(self, mock_api) -> None:
        mock_api.body = {"id": "n1", "key": "home"}

        result = runner.invoke(app, [*BIZ, "--format", "plain", "node", "get", "n1"])

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["id=n1", "key=home"]

    def test_table_format_from_env(self, mock_api, monkeypatch) -> None:
        monkeypatch.setenv("ARKY_FORMAT", "table")
        mock_api.body = [{"id": "n1", "key": "home"}]

        result = runner.invoke(app, [*BIZ, "node", "list"])

        assert result.exit_code == 0
        assert "KEY" in result.stdout
        assert "home" in result.stdout

    def test_format_from_config_file(self, mock_api) -> None:
        config_path().parent.mkdir(parents=True)
        config_path().write_text('{"format": "plain"}', encoding="utf-8")
        mock_api.body = {"code": "BA"}

        result = runner.invoke(app, ["platform", "country", "BA"])

        assert result.stdout.strip() == "code=BA"


class TestBodyDefaults:
    """Tests for commands that fill in defaults the caller did not supply."""

    def test_order_checkout_defaults_business_id(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "order", "checkout", "--data", '{"items": []}'])

        assert mock_api.last.url.path == "/v1/businesses/biz_1/orders/checkout"
        assert mock_api.last_json() == {"items": [], "businessId": "biz_1"}

    def test_order_checkout_keeps_business_id(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "order", "checkout", "--data", '{"businessId": "other"}'])

        assert mock_api.last_json() == {"businessId": "other"}

    def test_order_list_maps_status_to_statuses(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "order", "list", "--status", "paid"])

        assert mock_api.last.url.params["statuses"] == "paid"

    @pytest.mark.parametrize("command,suffix", [("create", ""), ("quote", "/quote"), ("checkout", "/checkout")])
    def test_booking_defaults_market(self, mock_api, command: str, suffix: str) -> None:
        runner.invoke(app, [*BIZ, "booking", command, "--data", '{"items": []}'])

        assert mock_api.last.url.path == f"/v1/businesses/biz_1/bookings{suffix}"
        assert mock_api.last_json() == {"items": [], "market": "default"}

    def test_booking_keeps_market(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "booking", "create", "--data", '{"market": "us"}'])

        assert mock_api.last_json() == {"market": "us"}

    def test_workflow_create_includes_business_id(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "workflow", "create", "wf", "--data", '{"nodes": {}}'])

        assert mock_api.last_json() == {"key": "wf", "businessId": "biz_1", "nodes": {}}

    def test_promo_code_create(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "promo-code", "create", "--data", '{"code": "SUMMER"}'])

        assert mock_api.last.url.path == "/v1/businesses/biz_1/promo-codes"
        assert mock_api.last_json() == {"businessId": "biz_1", "code": "SUMMER"}

    def test_notification_trigger_defaults_business_id(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "notification", "trigger", "--data", '{"channel": "email"}'])

        assert mock_api.last.url.path == "/v1/notifications/trigger"
        assert mock_api.last_json() == {"channel": "email", "businessId": "biz_1"}


class TestWorkflowAndAgentCommands:
    def test_workflow_delete_prints_ok_only(self, mock_api) -> None:
        mock_api.body = {"deleted": True}

        result = runner.invoke(app, [*BIZ, "workflow", "delete", "wf1"])

        assert result.exit_code == 0
        assert "OK Workflow deleted" in result.output
        assert "deleted\": true" not in result.output

    def test_workflow_trigger_uses_public_path(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "workflow", "trigger", "s3cret", "--data", '{"a": 1}'])

        assert mock_api.last.url.path == "/v1/workflows/trigger/s3cret"
        assert mock_api.last_json() == {"a": 1}

    def test_workflow_execution(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "workflow", "execution", "wf1", "ex1"])

        assert mock_api.last.url.path == "/v1/businesses/biz_1/workflows/wf1/executions/ex1"

    def test_agent_memories_default_limit(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "agent", "memories", "ag1", "--category", "fact"])

        assert mock_api.last.url.path == "/v1/businesses/biz_1/agents/ag1/memories"
        assert mock_api.last.url.params.multi_items() == [("limit", "100"), ("category", "fact")]

    def test_agent_delete_memory(self, mock_api) -> None:
        result = runner.invoke(app, [*BIZ, "agent", "delete-memory", "ag1", "m1"])

        assert result.exit_code == 0
        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/agents/ag1/memories/m1"
        assert "OK Memory deleted" in result.output


class TestBusinessCommands:
    def test_list_needs_no_business(self, mock_api) -> None:
        result = runner.invoke(app, ["business", "list", "--query", "shop"])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/businesses"
        assert mock_api.last.url.params.multi_items() == [("limit", "20"), ("query", "shop")]

    def test_invite(self, mock_api) -> None:
        result = runner.invoke(app, [*BIZ, "business", "invite", "--email", "a@b.co", "--role", "admin"])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/businesses/biz_1/invitation"
        assert mock_api.last_json() == {"email": "a@b.co", "role": "admin"}
        assert "OK Invitation sent to a@b.co" in result.output

    def test_remove_member(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "business", "remove-member", "--account-id", "acc_1"])

        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/members/acc_1"

    def test_subscribe_is_put(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "business", "subscribe", "--data", '{"planId": "p"}'])

        assert mock_api.last.method == "PUT"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/subscribe"


class TestDbCommands:
    """Tests for the platform key-value commands."""

    def test_scan_default_limit(self, mock_api) -> None:
        runner.invoke(app, ["db", "scan", "users/"])

        assert mock_api.last.url.path == "/v1/platform/data"
        assert mock_api.last.url.params.multi_items() == [("key", "users/"), ("limit", "200")]

    def test_put_parses_value(self, mock_api) -> None:
        result = runner.invoke(app, ["db", "put", "users/1", "--value", '{"name": "John"}', "--old-key", "users/0"])

        assert result.exit_code == 0
        assert mock_api.last_json() == {"key": "users/1", "value": {"name": "John"}, "oldKey": "users/0"}
        assert "OK Stored key: users/1" in result.output

    def test_delete_sends_key_as_query(self, mock_api) -> None:
        result = runner.invoke(app, ["db", "delete", "users/1"])

        assert result.exit_code == 0
        assert mock_api.last.method == "DELETE"
        assert mock_api.last.url.params["key"] == "users/1"
        assert "OK Deleted key: users/1" in result.output

    def test_run_script(self, mock_api) -> None:
        runner.invoke(app, ["db", "run-script", "cleanup", "--value", "42"])

        assert mock_api.last.url.path == "/v1/platform/scripts"
        assert mock_api.last_json() == {"name": "cleanup", "value": "42"}


class TestMediaCommands:
    """Tests for media upload."""

    def test_upload_sends_files_with_mime_types(self, mock_api, tmp_path) -> None:
        photo = tmp_path / "photo.PNG"
        photo.write_bytes(b"\x89PNG")
        doc = tmp_path / "notes.unknown"
        doc.write_bytes(b"data")
        mock_api.body = [{"id": "m1"}, {"id": "m2"}]

        result = runner.invoke(app, [*BIZ, "media", "upload", str(photo), str(doc)])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/businesses/biz_1/media"
        content = mock_api.last.content
        assert b'name="files[0]"; filename="photo.PNG"\r\nContent-Type: image/png' in content
        assert b'name="files[1]"; filename="notes.unknown"\r\nContent-Type: application/octet-stream' in content

    def test_upload_missing_file(self, mock_api, tmp_path) -> None:
        missing = tmp_path / "missing.png"

        result = runner.invoke(app, [*BIZ, "media", "upload", str(missing)])

        assert result.exit_code == 1
        assert f"Invalid input: File not found: {missing}" in result.output
        assert mock_api.requests == []

    def test_list_mime_type_filter(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "media", "list", "--mime-type", "image/png"])

        assert mock_api.last.url.params["mimeType"] == "image/png"


class TestAccountAndNetworkCommands:
    def test_account_search_requires_business(self, mock_api) -> None:
        result = runner.invoke(app, ["account", "search"])

        assert result.exit_code == 1
        assert mock_api.requests == []

    def test_account_search_params(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "account", "search", "--query", "john"])

        assert mock_api.last.url.path == "/v1/accounts/search"
        assert mock_api.last.url.params.multi_items() == [("limit", "20"), ("businessId", "biz_1"), ("query", "john")]

    def test_confirm_phone(self, mock_api) -> None:
        result = runner.invoke(app, ["account", "confirm-phone", "--phone", "+387", "--code", "1234"])

        assert result.exit_code == 0
        assert mock_api.last_json() == {"phoneNumber": "+387", "code": "1234"}
        assert "OK Phone number confirmed" in result.output

    def test_network_search_products_price_range(self, mock_api) -> None:
        runner.invoke(app, ["network", "search-products", "net", "--price-from", "100", "--price-to", "500"])

        assert mock_api.last.url.path == "/v1/networks/net/products"
        assert mock_api.last.url.params.multi_items() == [("limit", "20"), ("priceFrom", "100"), ("priceTo", "500")]

    def test_shipping_rates(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "shipping", "rates", "o1"])

        assert mock_api.last.method == "POST"
        assert mock_api.last.url.path == "/v1/businesses/biz_1/orders/o1/shipping/rates"
        assert mock_api.last_json() == {}

    def test_event_update(self, mock_api) -> None:
        runner.invoke(app, [*BIZ, "event", "update", "ev1", "--data", '{"event": {"action": "note"}}'])

        assert mock_api.last.method == "PUT"
        assert mock_api.last.url.path == "/v1/events/ev1"


class TestAuthCommands:
    """Tests for login and token storage."""

    def test_login(self, mock_api) -> None:
        mock_api.body = {"success": True}

        result = runner.invoke(app, ["auth", "login", "a@b.co"])

        assert result.exit_code == 0
        assert mock_api.last.url.path == "/v1/auth/code"
        assert mock_api.last_json() == {"email": "a@b.co"}
        assert "OK Code sent to a@b.co" in result.output

    def test_verify_saves_token(self, mock_api) -> None:
        mock_api.body = {"accessToken": "tok_123", "accountId": "acc_1"}

        result = runner.invoke(app, ["auth", "verify", "a@b.co", "123456"])

        assert result.exit_code == 0
        assert mock_api.last_json() == {"email": "a@b.co", "code": "123456"}
        assert load_config_file().token == "tok_123"
        assert "Token saved to ~/.arky/config.json" in result.output

    def test_session_saves_token(self, mock_api) -> None:
        mock_api.body = {"accessToken": "anon_tok"}

        runner.invoke(app, ["auth", "session"])

        assert mock_api.last_json() == {}
        assert load_config_file().token == "anon_tok"

    def test_verify_without_token_saves_nothing(self, mock_api) -> None:
        mock_api.body = {"error": "expired"}

        result = runner.invoke(app, ["auth", "verify", "a@b.co", "000000"])

        assert result.exit_code == 0
        assert not config_path().exists()

    def test_token_is_sent_as_bearer(self, mock_api) -> None:
        runner.invoke(app, ["--token", "tok_flag", "auth", "whoami"])

        assert mock_api.last.url.path == "/v1/accounts/me"
        assert mock_api.last.headers["authorization"] == "Bearer tok_flag"


class TestConfigCommands:
    """Tests for local configuration commands."""

    def test_set_and_show(self) -> None:
        result = runner.invoke(app, ["config", "set", "business-id", "biz_9"])

        assert result.exit_code == 0
        assert "OK Config 'business-id' saved" in result.output
        assert load_config_file().business_id == "biz_9"

        shown = runner.invoke(app, ["config", "show"])
        data = json.loads(shown.stdout)
        assert data["business_id"] == "biz_9"
        assert data["config_file"] == str(config_path())

    def test_show_masks_long_token(self, monkeypatch) -> None:
        monkeypatch.setenv("ARKY_TOKEN", "abcdefghij0123456789XYZ123")

        result = runner.invoke(app, ["config", "show"])

        assert json.loads(result.stdout)["token"] == "abcdefghij...XYZ123"

    def test_show_keeps_short_token(self) -> None:
        result = runner.invoke(app, ["--token", "short", "config", "show"])

        assert json.loads(result.stdout)["token"] == "short"

    def test_set_unknown_key(self) -> None:
        result = runner.invoke(app, ["config", "set", "colour", "blue"])

        assert result.exit_code == 1
        assert "Invalid input: Unknown config key: colour" in result.output
        assert not config_path().exists()

    def test_path(self) -> None:
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(config_path())
