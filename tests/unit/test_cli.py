from __future__ import annotations

import json

import pytest

JOB = "Looking for a Python developer with AWS and Docker experience."
RESUME = "Jane Doe\n\nSUMMARY\nBackend engineer building services in Python.\n\nSKILLS\nPython, Go"


@pytest.fixture
def files(tmp_path, monkeypatch):
    monkeypatch.setenv("KEYWORD_SOURCE", "local")
    monkeypatch.setenv("TAILORING_INITIAL_DISPLAY_DELAY", "0")
    monkeypatch.setenv("TAILORING_SCORE_ANIMATION_SECONDS", "0")
    monkeypatch.chdir(tmp_path)

    jd = tmp_path / "job.txt"
    jd.write_text(JOB, encoding="utf-8")
    resume = tmp_path / "resume.txt"
    resume.write_text(RESUME, encoding="utf-8")
    return jd, resume


def test_cli_without_mode_prints_help(capsys) -> None:
    from ats_tailor.__main__ import main

    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_cli_extract_prints_keywords(files, capsys) -> None:
    from ats_tailor.__main__ import main

    jd, _ = files

    exit_code = main(["extract", "--jd", str(jd), "--max-keywords", "3"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["all"] == ["python", "docker", "aws"]
    assert payload["total"] == 3


def test_cli_score_prints_analysis_and_suggestions(files, capsys) -> None:
    from ats_tailor.__main__ import main

    jd, resume = files

    exit_code = main(["score", "--jd", str(jd), "--resume", str(resume)])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert "python" in payload["analysis"]["match"]["matched"]
    assert payload["analysis"]["match"]["score"] == 25
    assert payload["suggestions"][0]["priority"] == "high"


def test_cli_tailor_writes_result(files, tmp_path, capsys) -> None:
    from ats_tailor.__main__ import main

    jd, resume = files
    out = tmp_path / "result.json"

    exit_code = main(
        ["tailor", "--jd", str(jd), "--resume", str(resume), "--out", str(out)]
    )

    assert exit_code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["final_score"] == 100
    assert payload["initial_score"] == 25
    assert payload["stats"]["score_improvement"] == 75
    stderr = capsys.readouterr().err
    assert "[100%]" in stderr


def test_cli_tailor_empty_job_description_exits_1(files, tmp_path, capsys) -> None:
    from ats_tailor.__main__ import main

    _, resume = files
    empty = tmp_path / "empty.txt"
    empty.write_text("", encoding="utf-8")

    exit_code = main(["tailor", "--jd", str(empty), "--resume", str(resume)])

    assert exit_code == 1
    assert "Job description is required" in capsys.readouterr().err


def test_cli_missing_file_exits_1(tmp_path, capsys) -> None:
    from ats_tailor.__main__ import main

    exit_code = main(["extract", "--jd", str(tmp_path / "missing.txt")])

    assert exit_code == 1
    assert "Error" in capsys.readouterr().err


def test_cli_rejects_out_of_range_target_score(files) -> None:
    from ats_tailor.__main__ import main

    jd, resume = files

    with pytest.raises(SystemExit):
        main(
            ["tailor", "--jd", str(jd), "--resume", str(resume), "--target-score", "150"]
        )
