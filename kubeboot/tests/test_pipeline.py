from dataclasses import replace
from datetime import date

import pytest

from kubeboot.errors import (
    CommandError, InstallError, NoCopyToolError, NoTransferToolError, UnsupportedPlatformError,
)
from kubeboot.modules import fetcher
from kubeboot.modules.models import BootstrapPhase
from kubeboot.modules.pipeline import BootstrapPipeline


def _pipeline(settings, runner, system="Linux", machine="x86_64"):
    return BootstrapPipeline(settings, runner=runner, system=system, machine=machine, today=date(2026, 10, 17))


def test_end_to_end(settings, make_runner):
    runner = make_runner()
    pipeline = _pipeline(settings, runner)

    state = pipeline.run()

    assert state.phase == BootstrapPhase.COMPLETED
    assert state.errors == []
    assert state.completed == [
        BootstrapPhase.DETECTING_PLATFORM,
        BootstrapPhase.DOWNLOADING_KUBECTL,
        BootstrapPhase.COPYING_CERTIFICATES,
        BootstrapPhase.CONFIGURING_KUBECTL,
        BootstrapPhase.CHECKING_CONNECTIVITY,
    ]
    assert (pipeline.target.platform, pipeline.target.arch) == ("linux", "amd64")

    download = runner.commands[0]
    assert "/bin/linux/amd64/kubectl" in download[2]
    assert settings.install_path.exists()
    assert runner.commands[1][0] == str(settings.install_path)

    scp = [c for c in runner.commands if c[0] == "/usr/bin/scp"]
    assert len(scp) == 1

    calls = runner.kubectl_calls()
    assert [c[:2] for c in calls[2:]] == [
        ["config", "set-cluster"],
        ["config", "set-credentials"],
        ["config", "set-context"],
        ["config", "use-context"],
        ["get", "nodes"],
    ]
    assert runner.commands[-1][1:3] == ["get", "nodes"]


def test_missing_transfer_tools_stops_before_download(settings, make_runner, monkeypatch):
    requested = []
    monkeypatch.setattr(fetcher.requests, "get", lambda url, **kwargs: requested.append(url))
    runner = make_runner(tools=("scp",))
    pipeline = _pipeline(replace(settings, release="stable"), runner)

    with pytest.raises(NoTransferToolError) as exc:
        pipeline.run()

    assert exc.value.exit_code == 3
    assert runner.commands == []
    assert pipeline.state.phase == BootstrapPhase.FAILED
    assert pipeline.state.completed == [BootstrapPhase.DETECTING_PLATFORM]
    assert requested == []


def test_unsupported_platform_runs_nothing(settings, make_runner):
    runner = make_runner()
    pipeline = _pipeline(settings, runner, system="Windows")

    with pytest.raises(UnsupportedPlatformError):
        pipeline.run()

    assert pipeline.target is None
    assert runner.commands == []
    assert pipeline.state.errors[0].startswith("detecting_platform")


def test_missing_scp_stops_before_configuring(settings, make_runner):
    runner = make_runner(tools=("curl",))
    with pytest.raises(NoCopyToolError):
        _pipeline(settings, runner).run()
    assert not any(c[1] == "set-cluster" for c in runner.kubectl_calls())


def test_failed_node_listing_propagates_exit_code(settings, make_runner):
    runner = make_runner(fail_on={"nodes": 1})
    pipeline = _pipeline(settings, runner)

    with pytest.raises(CommandError) as exc:
        pipeline.run()

    assert exc.value.exit_code == 1
    assert pipeline.state.completed[-1] == BootstrapPhase.CONFIGURING_KUBECTL


def test_dry_run_touches_nothing(settings, make_runner):
    dry = replace(settings, dry_run=True)
    runner = make_runner(dry_run=True)
    state = _pipeline(dry, runner).run()

    assert state.phase == BootstrapPhase.COMPLETED
    assert not settings.install_path.exists()
    assert not settings.local_cert_dir.exists()
    assert runner.commands[-1][1:3] == ["get", "nodes"]


def test_missing_transfer_tools_wins_over_bad_release(settings, make_runner):
    runner = make_runner(tools=("scp",))
    with pytest.raises(NoTransferToolError):
        _pipeline(replace(settings, release="../v1"), runner).run()


def test_install_failure_is_recorded(settings, make_runner, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    runner = make_runner()
    pipeline = _pipeline(replace(settings, install_path=blocker / "kubectl"), runner)

    with pytest.raises(InstallError) as exc:
        pipeline.run()

    assert exc.value.exit_code == 7
    assert pipeline.state.phase == BootstrapPhase.FAILED
    assert pipeline.state.errors[0].startswith("downloading_kubectl")
    assert not any(c[0] == "/usr/bin/scp" for c in runner.commands)
