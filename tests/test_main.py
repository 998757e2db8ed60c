"""
Tests for the command line front end, dood!
"""

import json

import httpx
import pytest

import main
from internal.config.manager import ConfigManager
from lib.google_maps import ClientConfiguration, LatLng, Outcome


def makeClient(handler) -> main.GoogleMapsClient:
    httpClient = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ClientConfiguration("cli_test_key_123").withHttpClient(httpClient).build()


class TestParseArguments:
    """Test argument parsing."""

    def testGeocode(self):
        args = main.parse_arguments(["geocode", "Mountain View", "--region", "us"])

        assert args.command == "geocode"
        assert args.address == "Mountain View"
        assert args.region == "us"
        assert args.config == "config.toml"

    def testConfigDirsAreAbsolute(self, tempDir):
        args = main.parse_arguments(["--config-dir", "configs", "--config-dir", str(tempDir), "reverse", "1,2"])

        assert all(path.startswith("/") for path in args.config_dir)
        assert args.config_dir[1] == str(tempDir)

    def testDistanceRepeatableArguments(self):
        args = main.parse_arguments(
            ["distance", "--origin", "Boston", "--origin", "Quebec", "--destination", "Ottawa", "--mode", "walking"]
        )

        assert args.origin == ["Boston", "Quebec"]
        assert args.destination == ["Ottawa"]
        assert args.mode == "walking"

    def testCommandRequired(self):
        with pytest.raises(SystemExit):
            main.parse_arguments([])

    def testPrintConfigWithoutCommand(self):
        assert main.parse_arguments(["--print-config"]).print_config is True


class TestPrintConfig:
    """Test --print-config output."""

    def testApiKeyIsMasked(self, tempDir, configFile, capsys):
        manager = ConfigManager(str(configFile), dotEnvFile=str(tempDir / ".env"))

        main.prettyPrintConfig(manager)

        output = capsys.readouterr().out
        assert "cli_test_key_123" not in output
        assert '"api-key": "***"' in output
        assert '"level": "WARNING"' in output
        # The loaded configuration itself is untouched
        assert manager.getApiKey() == "cli_test_key_123"

    def testMainPrintConfig(self, tempDir, configFile, capsys):
        exitCode = main.main(["--config", str(configFile), "--dotenv", str(tempDir / ".env"), "--print-config"])

        assert exitCode == 0
        assert "Configuration loaded successfully" in capsys.readouterr().out


class TestRunCommand:
    """Test dispatch of commands to client calls."""

    @pytest.mark.asyncio
    async def testReverse(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "OK", "results": [{"place_id": "abc"}]})

        args = main.parse_arguments(["reverse", "40.714224,-73.961452"])
        async with makeClient(handler) as client:
            envelope = await main.runCommand(client, args)

        assert envelope.outcome == Outcome.OK
        assert seen[0].url.path == "/maps/api/geocode/json"
        assert seen[0].url.params["latlng"] == "40.714224,-73.961452"

    @pytest.mark.asyncio
    async def testDistanceWithMode(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "status": "OK",
                    "origin_addresses": ["Boston"],
                    "destination_addresses": ["Ottawa"],
                    "rows": [{"elements": [{"status": "OK", "distance": {"value": 1}, "duration": {"value": 2}}]}],
                },
            )

        args = main.parse_arguments(
            ["distance", "--origin", "Boston", "--destination", "Ottawa", "--mode", "bicycling"]
        )
        async with makeClient(handler) as client:
            envelope = await main.runCommand(client, args)

        assert len(envelope.elements) == 1
        assert seen[0].url.params["mode"] == "bicycling"

    @pytest.mark.asyncio
    async def testElevationMultiplePoints(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "OK", "results": [{"elevation": 1608.6}, {"elevation": -50.8}]})

        args = main.parse_arguments(["elevation", "39.7391536,-104.9847034", "36.455556,-116.866667"])
        async with makeClient(handler) as client:
            envelope = await main.runCommand(client, args)

        assert [result["elevation"] for result in envelope.results] == [1608.6, -50.8]
        assert seen[0].url.params["locations"] == "39.7391536,-104.9847034|36.455556,-116.866667"


class TestMain:
    """Test the main entry point."""

    def testRequestFailureExitsWithOne(self, tempDir, configFile, monkeypatch):
        """Invalid input is a client error, reported without a traceback, dood!"""
        initCalls = []
        monkeypatch.setattr(main, "initLogging", lambda config, secrets=(): initCalls.append(list(secrets)))

        exitCode = main.main(["--config", str(configFile), "--dotenv", str(tempDir / ".env"), "reverse", "north"])

        assert exitCode == 1
        assert initCalls == [["cli_test_key_123"]]

    def testSuccessPrintsResponseJson(self, tempDir, configFile, monkeypatch, capsys):
        monkeypatch.setattr(main, "initLogging", lambda config, secrets=(): None)

        async def fakeRun(configManager, args):
            async with makeClient(
                lambda request: httpx.Response(200, json={"status": "OK", "timeZoneId": "America/Los_Angeles"})
            ) as client:
                return await client.timeZone(LatLng(39.6034810, -119.6822510), 1331161200)

        monkeypatch.setattr(main, "run", fakeRun)

        exitCode = main.main(["--config", str(configFile), "--dotenv", str(tempDir / ".env"), "timezone", "1,2"])

        assert exitCode == 0
        assert json.loads(capsys.readouterr().out)["timeZoneId"] == "America/Los_Angeles"
