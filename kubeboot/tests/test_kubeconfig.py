from dataclasses import replace
from datetime import date

import pytest

from kubeboot.errors import CommandError
from kubeboot.modules.kubeconfig import backup_kubeconfig, backup_path_for, configure_kubectl
from kubeboot.modules.kubectl import Kubectl

TODAY = date(2026, 10, 17)


def test_backup_name(tmp_path):
    assert backup_path_for(tmp_path / "config", TODAY).name == "config.20261017.bak"


def test_backup_copies_config(tmp_path):
    kubeconfig = tmp_path / "config"
    kubeconfig.write_text("apiVersion: v1\n")

    backup = backup_kubeconfig(kubeconfig, TODAY)

    assert backup == tmp_path / "config.20261017.bak"
    assert backup.read_text() == "apiVersion: v1\n"


def test_same_day_backup_is_overwritten(tmp_path):
    kubeconfig = tmp_path / "config"
    kubeconfig.write_text("first\n")
    backup_kubeconfig(kubeconfig, TODAY)
    kubeconfig.write_text("second\n")

    backup = backup_kubeconfig(kubeconfig, TODAY)

    assert backup.read_text() == "second\n"
    assert len(list(tmp_path.glob("config.*.bak"))) == 1


def test_missing_config_is_not_an_error(tmp_path):
    assert backup_kubeconfig(tmp_path / "config", TODAY) is None


def _kubectl(settings, runner):
    return Kubectl(settings.install_path, settings.kubeconfig, runner)


def test_configure_order(settings, make_runner):
    runner = make_runner()
    configure_kubectl(settings, _kubectl(settings, runner), TODAY)

    ca = str(settings.ca_cert)
    assert runner.kubectl_calls() == [
        ["config", "set-cluster", "default-cluster", "--server=https://10.0.0.10:443",
         f"--certificate-authority={ca}", "--embed-certs=true"],
        ["config", "set-credentials", "default-admin", f"--certificate-authority={ca}",
         f"--client-key={settings.admin_key}", f"--client-certificate={settings.admin_cert}"],
        ["config", "set-context", "default-system", "--cluster=default-cluster", "--user=default-admin"],
        ["config", "use-context", "default-system"],
    ]
    for cmd in runner.commands:
        assert cmd[0] == str(settings.install_path)
        assert cmd[-1] == f"--kubeconfig={settings.kubeconfig}"


def test_configure_backs_up_before_writing(settings, make_runner):
    settings.kubeconfig.parent.mkdir(parents=True)
    settings.kubeconfig.write_text("original\n")
    backup = backup_path_for(settings.kubeconfig, TODAY)

    class CheckingRunner(make_runner):
        def run(self, cmd, capture=False, check=True):
            assert backup.exists()
            return super().run(cmd, capture, check)

    runner = CheckingRunner()
    configure_kubectl(settings, _kubectl(settings, runner), TODAY)
    assert backup.read_text() == "original\n"


def test_configure_custom_names(settings, make_runner):
    named = replace(settings, cluster_name="prod", user_name="ops", context_name="prod-ops")
    runner = make_runner()
    configure_kubectl(named, _kubectl(named, runner), TODAY)
    assert runner.kubectl_calls()[2] == ["config", "set-context", "prod-ops", "--cluster=prod", "--user=ops"]
    assert runner.kubectl_calls()[3] == ["config", "use-context", "prod-ops"]


def test_configure_stops_at_first_failure(settings, make_runner):
    runner = make_runner(fail_on={"set-credentials": 7})
    with pytest.raises(CommandError) as exc:
        configure_kubectl(settings, _kubectl(settings, runner), TODAY)

    assert exc.value.exit_code == 7
    assert [c[1] for c in runner.kubectl_calls()] == ["set-cluster", "set-credentials"]
