import pytest

from psortm_app.coms.cli import main
from psortm_app.constants import VERSION


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as e:
        main(["-h"])
    assert e.value.code == 0
    out = capsys.readouterr().out
    for flag in ["--seq", "--tax", "--outdir", "--cutoff", "--divergent", "--format", "--output", "--exact", "--verbose", "--version"]:
        assert flag in out


def test_version(capsys, recorder):
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert f"v{VERSION}" in out
    assert "brinkmanlab/psortm:1.0.2" in out
    assert recorder.calls == []


def test_bad_flag_value_exits_two(capsys):
    with pytest.raises(SystemExit) as e:
        main(["-c", "high"])
    assert e.value.code == 2
    assert "usage:" in capsys.readouterr().err


@pytest.mark.parametrize("omit, message", [
    ("-i", "a sequence file must be given with -i/--seq"),
    ("-t", "a taxonomy file must be given with -t/--tax"),
    ("-r", "a results directory must be given with -r/--outdir"),
])
def test_missing_required_prints_guidance(inputs, recorder, capsys, omit, message):
    seq, tax, out = inputs
    given = {"-i": str(seq), "-t": str(tax), "-r": str(out)}
    del given[omit]
    argv = [tok for pair in given.items() for tok in pair]

    assert main(argv) == 2
    err = capsys.readouterr().err
    assert message in err
    assert "usage:" in err
    assert recorder.calls == []
    assert list(out.iterdir()) == []


def test_full_run(inputs, recorder):
    seq, tax, out = inputs
    code = main(["-i", str(seq), "-t", str(tax), "-r", str(out) + "/", "-c", "7.5", "-o", "long", "-e"])
    assert code == 0
    assert len(recorder.calls) == 1
    call = recorder.calls[0]
    assert call["files_present"] == ["a.fasta", "tax.csv"]
    assert call["command"] == ["--cutoff", "7.5", "--output", "long", "--exact"]
    assert list(out.iterdir()) == []


def test_dry_run(inputs, recorder, capsys):
    seq, tax, out = inputs
    assert main(["-i", str(seq), "-t", str(tax), "-r", str(out), "--dry-run"]) == 0
    assert "docker run" in capsys.readouterr().out
    assert recorder.calls == []
    assert list(out.iterdir()) == []


def test_config_flag(inputs, recorder, tmp_path):
    seq, tax, out = inputs
    config = tmp_path / "config.yml"
    config.write_text("image: local/psortm:dev\nsudo: false\n")
    main(["-i", str(seq), "-t", str(tax), "-r", str(out), "--config", str(config)])
    assert recorder.calls[0]["run_command"].startswith("docker run")
    assert "local/psortm:dev" in recorder.calls[0]["run_command"]


def test_bad_config_exits_two(inputs, recorder, tmp_path, capsys):
    seq, tax, out = inputs
    config = tmp_path / "config.yml"
    config.write_text("runtime: podman\n")
    assert main(["-i", str(seq), "-t", str(tax), "-r", str(out), "--config", str(config)]) == 2
    assert "runtime must be one of" in capsys.readouterr().err
    assert recorder.calls == []


def test_staging_failure_exits_one(inputs, recorder, monkeypatch, capsys):
    import shutil

    seq, tax, out = inputs
    def _fail(src, dst):
        raise PermissionError("read-only")
    monkeypatch.setattr(shutil, "copy", _fail)

    assert main(["-i", str(seq), "-t", str(tax), "-r", str(out)]) == 1
    assert "failed to copy" in capsys.readouterr().err
    assert recorder.calls == []


def test_taxonomy_copy_failure_removes_sequence_copy(inputs, recorder, monkeypatch, capsys):
    import shutil

    seq, tax, out = inputs
    real_copy = shutil.copy
    copies = []
    def _fail_second(src, dst):
        copies.append(dst)
        if len(copies) == 2:
            raise OSError("disk full")
        return real_copy(src, dst)
    monkeypatch.setattr(shutil, "copy", _fail_second)

    assert main(["-i", str(seq), "-t", str(tax), "-r", str(out)]) == 1
    assert "failed to copy" in capsys.readouterr().err
    assert copies == [out / "a.fasta", out / "tax.csv"]
    assert list(out.iterdir()) == []
    assert recorder.calls == []


def test_log_file(inputs, recorder, tmp_path):
    seq, tax, out = inputs
    log = tmp_path / "run.log"
    recorder.exit_code = 1
    main(["-i", str(seq), "-t", str(tax), "-r", str(out), "--log", str(log), "-v"])
    assert "exited with code [1]" in (tmp_path / "run.err").read_text()
    assert "D| sequences" in (tmp_path / "run.out").read_text()
