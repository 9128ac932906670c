"""
Tests for the FastAPI application and its lifespan

Runs the lifecycle through Starlette's TestClient so the callbacks fire in
the order an ASGI server would drive them.
"""

import asyncio
import logging

import pytest
from fastapi.testclient import TestClient

from cluster_bootstrap.api.app import create_app
from cluster_bootstrap.startup.coordinator import LifecycleCoordinator
from cluster_bootstrap.startup.exceptions import DirectoryProvisionError
from cluster_bootstrap.startup.models import LifecycleState


class TestStandaloneApp:
    """Test a standalone startup"""

    def test_startup_completes(self, make_settings, tmp_path):
        """Test the lifespan drives the coordinator to STARTED"""
        app = create_app(make_settings(standalone=True))

        with TestClient(app) as client:
            response = client.get("/health/ready")

            assert response.status_code == 200
            assert response.json() == {"ready": True, "state": "started"}

        home = tmp_path / "home"
        assert sorted(p.name for p in home.iterdir()) == ["conf", "data", "logs"]

    def test_published_properties(self, make_settings):
        """Test environment preparation publishes into the app environment"""
        app = create_app(make_settings(standalone=True, function_mode="naming"))

        with TestClient(app):
            properties = app.state.environment.properties

        assert properties == {
            "cluster.mode": "stand alone",
            "cluster.function.mode": "naming",
            "cluster.local.ip": "10.0.0.9",
        }

    def test_health_snapshot(self, make_settings):
        """Test /health returns the coordinator snapshot"""
        app = create_app(make_settings(standalone=True))

        with TestClient(app) as client:
            data = client.get("/health").json()

        assert data["state"] == "started"
        assert data["starting"] is False
        assert data["config"]["deployment_mode"] == "stand alone"
        assert "version" in data

    def test_liveness(self, make_settings):
        """Test the liveness probe"""
        app = create_app(make_settings(standalone=True))

        with TestClient(app) as client:
            assert client.get("/health/live").json() == {"status": "alive"}

    def test_not_ready_before_startup(self, make_settings):
        """Test readiness is 503 when the lifespan has not run"""
        app = create_app(make_settings(standalone=True))
        client = TestClient(app)

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["state"] == "idle"


class TestClusterApp:
    """Test a cluster-mode startup with slow startup hooks"""

    def test_heartbeat_during_startup_hooks(self, make_settings, tmp_path, caplog):
        """Test the heartbeat logs while hooks run and stops afterwards"""
        caplog.set_level(logging.INFO)
        home = tmp_path / "home"
        (home / "conf").mkdir(parents=True)
        (home / "conf" / "cluster.conf").write_text("10.0.0.1:8848\n")

        async def slow_hook(app):
            await asyncio.sleep(0.3)

        app = create_app(make_settings(home=home, heartbeat_interval=0.02), startup_hooks=[slow_hook])

        with TestClient(app):
            coordinator = app.state.coordinator
            assert coordinator.state == LifecycleState.STARTED
            assert not coordinator.heartbeat.is_running

        lines = [r for r in caplog.records if r.getMessage() == "Server is starting..."]
        assert len(lines) >= 1
        assert "The server IP list of Server is ['10.0.0.1:8848']" in caplog.text
        assert "Server started successfully in cluster mode." in caplog.text


class TestFailedStartup:
    """Test a startup hook failure"""

    def test_failure_is_reraised_and_reported(self, make_settings, caplog):
        """Test the cause propagates, is logged and shutdown is requested"""

        async def broken_hook(app):
            raise RuntimeError("database unreachable")

        app = create_app(make_settings(standalone=True), startup_hooks=[broken_hook])

        with pytest.raises(RuntimeError, match="database unreachable"):
            with TestClient(app):
                pass

        assert app.state.coordinator.state == LifecycleState.FAILED
        assert app.state.shutdown_requested is True
        assert "Startup errors : database unreachable" in caplog.text

    def test_extra_listeners_see_failure(self, make_settings):
        """Test extra listeners are notified after the coordinator"""
        seen = []

        class Listener:
            order = 0

            def on_starting(self):
                seen.append("starting")

            def on_environment_prepared(self, environment):
                seen.append("environment_prepared")

            def on_context_prepared(self):
                seen.append("context_prepared")

            def on_context_loaded(self):
                seen.append("context_loaded")

            def on_started(self):
                seen.append("started")

            def on_running(self):
                seen.append("running")

            def on_failed(self, cause):
                seen.append("failed")

        async def broken_hook(app):
            raise RuntimeError("boom")

        app = create_app(
            make_settings(standalone=True), startup_hooks=[broken_hook], listeners=[Listener()]
        )

        with pytest.raises(RuntimeError):
            with TestClient(app):
                pass

        assert seen == [
            "starting",
            "environment_prepared",
            "context_prepared",
            "context_loaded",
            "failed",
        ]

    def test_directory_failure_is_reported(self, make_settings, tmp_path, caplog):
        """Test a directory error in on_started is reported as a failed startup"""
        home = tmp_path / "home"
        home.mkdir()
        (home / "logs").write_text("not a directory")
        app = create_app(make_settings(home=home, standalone=True))

        with pytest.raises(DirectoryProvisionError):
            with TestClient(app):
                pass

        assert app.state.coordinator.state == LifecycleState.FAILED
        assert app.state.shutdown_requested is True
        assert "Startup errors" in caplog.text
        assert "failed to start, please see" in caplog.text
        assert "Ignoring on_failed" not in caplog.text

    def test_failure_in_starting_reaches_failed(self, make_settings):
        """Test a listener raising in on_starting still triggers failed"""
        seen = []

        class BrokenStarter:
            order = 0

            def on_starting(self):
                raise RuntimeError("cannot start")

            def on_failed(self, cause):
                seen.append(str(cause))

        app = create_app(make_settings(standalone=True), listeners=[BrokenStarter()])

        with pytest.raises(RuntimeError, match="cannot start"):
            with TestClient(app):
                pass

        assert seen == ["cannot start"]
        assert app.state.coordinator.state == LifecycleState.FAILED
        assert app.state.shutdown_requested is True


class TestCustomCoordinator:
    """Test passing a coordinator into the app factory"""

    def test_shutdown_request_is_wired(self, make_settings):
        """Test a coordinator without a shutdown callable gets the app's"""

        async def broken_hook(app):
            raise RuntimeError("boom")

        coordinator = LifecycleCoordinator()
        app = create_app(
            make_settings(standalone=True), startup_hooks=[broken_hook], coordinator=coordinator
        )

        with pytest.raises(RuntimeError):
            with TestClient(app):
                pass

        assert app.state.shutdown_requested is True

    def test_own_shutdown_is_kept(self, make_settings):
        """Test a coordinator's own shutdown callable is not replaced"""
        calls = []
        coordinator = LifecycleCoordinator(shutdown=lambda: calls.append("closed"))

        async def broken_hook(app):
            raise RuntimeError("boom")

        app = create_app(
            make_settings(standalone=True), startup_hooks=[broken_hook], coordinator=coordinator
        )

        with pytest.raises(RuntimeError):
            with TestClient(app):
                pass

        assert coordinator.shutdown is not None
        assert calls == ["closed"]
        assert app.state.shutdown_requested is False
