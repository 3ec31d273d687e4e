import io
import json

from dashfmt.cli import main

PROFILE_DATA = (
    "1:stardust1971:2:2073761:13:149:17:498:10:9:11:10:3:13723:46:2312:4:484:8:19:18:0:19:0:50:0:20:"
    "stardust19710:21:95:22:48:23:33:24:18:25:11:26:10:28:1:43:2:48:13:30:0:16:8451:31:0:44:"
    "stadust1971:45::49:0:38:0:39:579:40:0:29:1"
)


def test_normalizes_each_line(tmp_path, capsys):
    path = tmp_path / "creators.txt"
    path.write_text("4170784:Serponge:119741:34:fda\n\n4170784:Serponge:0\n", encoding="utf-8")

    assert main([str(path), "--kind", "creator"]) == 0
    assert capsys.readouterr().out == "4170784:Serponge:119741\n4170784:Serponge:0\n"


def test_json_output_decodes_fields(tmp_path, capsys):
    path = tmp_path / "profiles.txt"
    path.write_text(PROFILE_DATA + "\n", encoding="utf-8")

    assert main([str(path), "--kind", "profile", "--json"]) == 0
    decoded = json.loads(capsys.readouterr().out)
    assert decoded["name"] == "stardust1971"
    assert decoded["mod_level"] == "none"
    assert decoded["secondary_color"] == [255, 125, 0]


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("4170784:Serponge:0\n"))

    assert main(["--kind", "creator"]) == 0
    assert capsys.readouterr().out == "4170784:Serponge:0\n"


def test_duplicate_policy_flag(tmp_path, capsys):
    path = tmp_path / "profiles.txt"
    path.write_text(PROFILE_DATA + ":49:2\n", encoding="utf-8")

    assert main([str(path), "--kind", "profile", "--duplicates", "error"]) == 2
    assert "occurs more than once" in capsys.readouterr().err

    assert main([str(path), "--kind", "profile", "--duplicates", "first"]) == 0
    assert ":49:0:" in capsys.readouterr().out


def test_bad_record_exits_with_error(tmp_path, capsys):
    path = tmp_path / "creators.txt"
    path.write_text("41x0784:Serponge:0\n", encoding="utf-8")

    assert main([str(path), "--kind", "creator"]) == 2
    assert capsys.readouterr().err.startswith("error: field 'user_id'")


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "--kind", "song"]) == 2
    assert "error:" in capsys.readouterr().err


def test_input_that_is_not_utf8(tmp_path, capsys):
    path = tmp_path / "creators.txt"
    path.write_bytes(b"4170784:Serp\xffonge:0\n")

    assert main([str(path), "--kind", "creator"]) == 2
    assert capsys.readouterr().err.startswith("error:")
