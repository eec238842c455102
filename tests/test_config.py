import logging
import pytest
from fncompose import dotdict, load_config, resolve_callable, pipeline_from_config, load_pipeline, ConfigError
from fixtures import years


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return str(path)


def test_dotdict():
    cfg = dotdict.create({'a': {'b': [1, {'c': 2}]}, 'd': (3,)})
    assert cfg.a.b[1].c == 2
    cfg.e = 5
    assert cfg['e'] == 5
    with pytest.raises(AttributeError):
        cfg.missing


def test_load_config(tmp_path):
    path = write_config(tmp_path, "date: 2021-01-02\nnumbers: [1, 2]\n")
    cfg = load_config(path)
    # timestamps are kept as strings
    assert cfg.date == "2021-01-02"
    assert cfg.numbers == [1, 2]
    assert cfg._config_root_dir == str(tmp_path)

    path = write_config(tmp_path, "- a\n- b\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_resolve_callable():
    assert resolve_callable("builtins:len") is len
    assert resolve_callable("builtins.len") is len
    assert resolve_callable("os.path:join") is __import__("os").path.join
    assert resolve_callable("fixtures:Recorder.__call__") is not None
    for ref in ["builtins:no_such_fn", "no_such_module_xyz:f", "len", "math:pi", 5]:
        with pytest.raises(ConfigError):
            resolve_callable(ref)


def test_pipeline_from_config():
    cfg = {'stages': ['fixtures:unique', ['fixtures:length', 'builtins:str']]}
    assert pipeline_from_config(cfg)(years) == "3"
    cfg = {'order': 'compose', 'stages': ['builtins:str', 'fixtures:length', 'fixtures:unique']}
    assert pipeline_from_config(cfg)(years) == "3"
    assert pipeline_from_config({'stages': []})(years) is years

    with pytest.raises(ConfigError):
        pipeline_from_config({'order': 'compose'})
    with pytest.raises(ConfigError):
        pipeline_from_config({'order': 'backward', 'stages': []})
    # single reference instead of a list
    with pytest.raises(ConfigError):
        pipeline_from_config({'stages': 'builtins:len'})
    # order from YAML list
    with pytest.raises(ConfigError):
        pipeline_from_config({'order': ['pipe'], 'stages': []})


def test_load_pipeline(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    path = write_config(tmp_path, """
pipeline:
    order: pipe
    report: true
    stages:
        - fixtures:unique
        - fixtures:length
        - builtins:str
""")
    fn = load_pipeline(path)
    assert fn(years) == "3"
    messages = [r.getMessage() for r in caplog.records]
    assert any("DONE fixtures.unique" in m for m in messages)
    assert any("DONE builtins.str" in m for m in messages)

    with pytest.raises(ConfigError):
        load_pipeline(path, key="other")
