import logging
import signal

from nodelink import service_runner


def test_run_async_service_runs_factory():
    calls = []

    async def factory():
        calls.append("ran")

    service_runner.run_async_service(factory, service_name="nodelink", configure_logging=False)

    assert calls == ["ran"]


def test_keyboard_interrupt_logs_shutdown_message(caplog):
    async def factory():
        raise KeyboardInterrupt

    with caplog.at_level(logging.INFO):
        service_runner.run_async_service(
            factory,
            service_name="nodelink",
            configure_logging=False,
            shutdown_message="Supervisor stopped",
        )

    assert "Supervisor stopped" in caplog.text


def test_ignore_sighup(monkeypatch):
    installed = []
    monkeypatch.setattr(service_runner.signal, "signal", lambda sig, handler: installed.append((sig, handler)))

    async def factory():
        return None

    service_runner.run_async_service(factory, service_name="nodelink", configure_logging=False, ignore_sighup=True)

    assert (signal.SIGHUP, signal.SIG_IGN) in installed
