import pytest
from unittest.mock import MagicMock, patch
from googleapiclient.errors import HttpError
from gsheet_append.sheets import client


def test_authorize_refreshes_service_account_credentials():
    with patch("gsheet_append.sheets.client.Credentials") as creds_cls, \
         patch("gsheet_append.sheets.client.Request") as request_cls:
        creds = creds_cls.from_service_account_info.return_value
        result = client.authorize({"email": "svc@example.com", "key": "pem"})

    assert result is creds
    info = creds_cls.from_service_account_info.call_args.args[0]
    assert info["client_email"] == "svc@example.com"
    assert info["private_key"] == "pem"
    assert creds_cls.from_service_account_info.call_args.kwargs["scopes"] == client.SCOPES
    creds.refresh.assert_called_once_with(request_cls.return_value)


def test_authorize_failure_propagates():
    error = ValueError("Could not deserialize key data")
    with patch("gsheet_append.sheets.client.Credentials") as creds_cls:
        creds_cls.from_service_account_info.side_effect = error
        with pytest.raises(ValueError) as excinfo:
            client.authorize({"email": "svc@example.com", "key": "bad"})
    assert excinfo.value is error


def test_get_service_builds_v4_client():
    with patch("gsheet_append.sheets.client.build") as build:
        svc = client.get_service("creds")
    build.assert_called_once_with("sheets", "v4", credentials="creds", cache_discovery=False)
    assert svc is build.return_value


def test_get_values():
    service = MagicMock()
    service.spreadsheets().values().get().execute.return_value = {"values": [["a"]]}
    assert client.get_values(service, "sid", "Log!A1:CV1") == {"values": [["a"]]}
    service.spreadsheets().values().get.assert_called_with(spreadsheetId="sid", range="Log!A1:CV1")


def test_append_values_inserts_raw_rows():
    service = MagicMock()
    client.append_values(service, "sid", "Log!A1", [[1, 2]])
    service.spreadsheets().values().append.assert_called_with(
        spreadsheetId="sid",
        range="Log!A1",
        valueInputOption="RAW",
        insertDataOption="INSERT_ROWS",
        body={"values": [[1, 2]]},
    )


def test_update_values():
    service = MagicMock()
    client.update_values(service, "sid", "Log!A3", [["b"]])
    service.spreadsheets().values().update.assert_called_with(
        spreadsheetId="sid",
        range="Log!A3",
        valueInputOption="RAW",
        body={"majorDimension": "ROWS", "values": [["b"]]},
    )


def test_batch_update_and_get_spreadsheet():
    service = MagicMock()
    requests = [{"addSheet": {"properties": {"title": "Log"}}}]
    client.batch_update(service, "sid", requests)
    service.spreadsheets().batchUpdate.assert_called_with(spreadsheetId="sid", body={"requests": requests})

    client.get_spreadsheet(service, "sid")
    service.spreadsheets().get.assert_called_with(spreadsheetId="sid")


def test_http_errors_propagate_unchanged():
    service = MagicMock()
    error = HttpError(MagicMock(status=429, reason="Too Many Requests"), b"rate limited")
    service.spreadsheets().values().get().execute.side_effect = error

    with pytest.raises(HttpError) as excinfo:
        client.get_values(service, "sid", "A1")
    assert excinfo.value is error


def test_helpers_leave_alerting_to_the_workflow():
    service = MagicMock()
    service.spreadsheets().batchUpdate().execute.side_effect = RuntimeError("quota")
    with patch("gsheet_append.config.logger.alert_admin") as alert_admin:
        with pytest.raises(RuntimeError):
            client.batch_update(service, "sid", [])
    alert_admin.assert_not_called()
