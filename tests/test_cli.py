"""Tests for waiverpdf.ui.cli -- command-line interface."""

from __future__ import annotations

import json

import pytest

from waiverpdf.constants import __version__
from waiverpdf.ui.cli import main


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ── Top level ────────────────────────────────────────────────────────


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["-V"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help_and_exits_1(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 1
    assert "render" in capsys.readouterr().out


# ── render ───────────────────────────────────────────────────────────


def test_render_stored_record_with_signature(tmp_path, record_dict, signature_png, capsys):
    record_path = _write_json(tmp_path / "record.json", record_dict)
    sig_path = tmp_path / "sig.png"
    sig_path.write_bytes(signature_png)
    out = tmp_path / "out.pdf"

    main(["render", str(record_path), "-s", str(sig_path), "-o", str(out)])

    pdf = out.read_bytes()
    assert pdf.startswith(b"%PDF-1.4")
    assert b"/Sig Do" in pdf
    assert f"Wrote {out}" in capsys.readouterr().out


def test_render_stored_record_without_signature(tmp_path, record_dict, capsys):
    record_path = _write_json(tmp_path / "record.json", record_dict)

    main(["render", str(record_path)])

    out = tmp_path / f"{record_dict['id']}.pdf"
    assert out.exists()
    assert b"/XObject" not in out.read_bytes()
    assert "no signature image" in capsys.readouterr().out


def test_render_form_payload_builds_record(tmp_path, form_payload):
    payload_path = _write_json(tmp_path / "form.json", form_payload)
    saved = tmp_path / "saved-record.json"

    main(["render", str(payload_path), "-o", str(tmp_path / "w.pdf"), "--save-record", str(saved)])

    pdf = (tmp_path / "w.pdf").read_bytes()
    assert b"/Sig Do" in pdf
    assert b"(Ana Silva) Tj" in pdf
    stored = json.loads(saved.read_text(encoding="utf-8"))
    assert stored["payload"]["fullName"] == "Ana Silva"
    assert stored["id"].encode() in pdf


def test_render_invalid_form_payload_exits_1(tmp_path, form_payload, capsys):
    form_payload["email"] = "nope"
    payload_path = _write_json(tmp_path / "form.json", form_payload)

    with pytest.raises(SystemExit) as exc_info:
        main(["render", str(payload_path), "-o", str(tmp_path / "w.pdf")])
    assert exc_info.value.code == 1
    assert "email" in capsys.readouterr().err
    assert not (tmp_path / "w.pdf").exists()


def test_render_broken_record_exits_1(tmp_path, record_dict, capsys):
    del record_dict["payload"]["fullName"]
    record_path = _write_json(tmp_path / "record.json", record_dict)

    with pytest.raises(SystemExit) as exc_info:
        main(["render", str(record_path)])
    assert exc_info.value.code == 1
    assert "payload.fullName" in capsys.readouterr().err


def test_render_missing_file_exits_1(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["render", str(tmp_path / "nope.json")])
    assert exc_info.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_render_not_json_exits_1(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["render", str(bad)])
    assert "not valid JSON" in capsys.readouterr().err


def test_render_custom_legal_text(tmp_path, record_dict):
    record_path = _write_json(tmp_path / "record.json", record_dict)
    legal = tmp_path / "termo.txt"
    legal.write_text("Clausula unica.\n", encoding="utf-8")
    out = tmp_path / "out.pdf"

    main(["render", str(record_path), "-o", str(out), "--legal-text", str(legal),
          "--legal-version", "v-test"])

    pdf = out.read_bytes()
    assert b"(Clausula unica.) Tj" in pdf
    assert b"/Count 2" in pdf


def test_render_custom_legal_text_without_version_exits_1(tmp_path, record_dict, capsys):
    record_path = _write_json(tmp_path / "record.json", record_dict)
    legal = tmp_path / "termo.txt"
    legal.write_text("Clausula unica.", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["render", str(record_path), "--legal-text", str(legal)])
    assert exc_info.value.code == 1
    assert "version tag" in capsys.readouterr().err


# ── check ────────────────────────────────────────────────────────────


def test_check_valid_pdf(tmp_path, record, signature_png, capsys):
    from waiverpdf.core.document import generate_waiver_pdf

    pdf = tmp_path / "w.pdf"
    pdf.write_bytes(generate_waiver_pdf(record, signature_png))

    main(["check", str(pdf)])
    out = capsys.readouterr().out
    assert "RESULT: VALID" in out
    assert "Signature image: embedded" in out


def test_check_invalid_pdf_exits_1(tmp_path, capsys):
    pdf = tmp_path / "bad.pdf"
    pdf.write_bytes(b"%PDF-1.4\ngarbage\n")

    with pytest.raises(SystemExit) as exc_info:
        main(["check", str(pdf)])
    assert exc_info.value.code == 1
    assert "RESULT: INVALID" in capsys.readouterr().out


# ── png-info ─────────────────────────────────────────────────────────


def test_png_info(tmp_path, signature_png, capsys):
    png = tmp_path / "sig.png"
    png.write_bytes(signature_png)

    main(["png-info", str(png)])
    assert "sig.png: 8x4 pixels" in capsys.readouterr().out


def test_png_info_unsupported_exits_1(tmp_path, capsys):
    png = tmp_path / "sig.png"
    png.write_bytes(b"GIF89a")

    with pytest.raises(SystemExit) as exc_info:
        main(["png-info", str(png)])
    assert exc_info.value.code == 1
    assert "cannot be embedded" in capsys.readouterr().err


# ── validate ─────────────────────────────────────────────────────────


def test_validate_ok(tmp_path, form_payload, capsys):
    main(["validate", str(_write_json(tmp_path / "form.json", form_payload))])
    assert "Payload OK" in capsys.readouterr().out


def test_validate_reports_every_error(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["validate", str(_write_json(tmp_path / "form.json", {"signatureDataUrl": ""}))])
    assert exc_info.value.code == 1
    err = capsys.readouterr().err
    assert "fullName" in err
    assert "consentPrivacy" in err


def test_validate_rejects_stored_record(tmp_path, record_dict, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["validate", str(_write_json(tmp_path / "r.json", record_dict))])
    assert exc_info.value.code == 1
    assert "not a stored record" in capsys.readouterr().err
