from circlecrop.utils.jsonio import read_json, write_json


def test_write_then_read(tmp_path):
    path = tmp_path / "nested" / "settings.json"

    write_json(path, {"editor": {"min_zoom": 1.0}})

    assert read_json(path) == {"editor": {"min_zoom": 1.0}}
    assert [p.name for p in path.parent.iterdir()] == ["settings.json"]
