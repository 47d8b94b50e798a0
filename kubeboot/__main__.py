from kubeboot.cli import app

app(prog_name="kubeboot")
