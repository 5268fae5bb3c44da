import io

import pytest

from pyinitools import IniDocument, IniParser, load

SAMPLE = """\
; database settings
[db]
host = localhost ; primary
port = 5432

[cache]
ttl = 60
"""


@pytest.fixture
def ini_file(tmp_path):
    path = tmp_path / 'settings.ini'
    path.write_text(SAMPLE, encoding='utf-8')
    return path


def test_read_file(ini_file):
    doc = IniParser(ini_file, 'utf-8').read()
    assert doc.sections() == ['db', 'cache']
    assert doc['db'].to_dict() == {'host': 'localhost', 'port': '5432'}
    assert doc.comments('db') == ['database settings']
    assert doc.comment('db', 'host') == 'primary'


def test_load(ini_file):
    assert load(str(ini_file))['cache']['ttl'] == '60'


def test_missing_file_gives_empty_document(tmp_path):
    doc = load(tmp_path / 'nope.ini')
    assert isinstance(doc, IniDocument)
    assert len(doc) == 0


def test_directory_gives_empty_document(tmp_path):
    assert len(load(tmp_path)) == 0


def test_read_text_stream():
    doc = IniParser(io.StringIO(SAMPLE)).read()
    assert doc['db']['port'] == '5432'


def test_read_binary_stream():
    raw = "[s]\nname = café\n".encode('utf-8')
    doc = IniParser(io.BytesIO(raw), 'utf-8').read()
    assert doc['s']['name'] == 'café'


def test_read_binary_stream_guessing_codec():
    doc = load(io.BytesIO(b"[s]\nname = plain\n"))
    assert doc['s']['name'] == 'plain'


def test_read_file_with_wrong_encoding(tmp_path):
    path = tmp_path / 'latin.ini'
    path.write_bytes('[s]\nname = caf\xe9\n'.encode('latin-1'))
    doc = IniParser(path, 'utf-8').read()
    assert doc['s']['name'].startswith('caf')
    assert len(doc['s']['name']) == 4


def test_write(tmp_path):
    doc = IniDocument()
    doc['a'] = {'x': '1'}
    doc['b'] = {'y': ''}
    path = tmp_path / 'out.ini'
    IniParser(path, 'utf-8').write(doc)
    assert path.read_text(encoding='utf-8') == "[a]\nx = 1\n\n[b]\ny = \n\n"


def test_write_then_read(ini_file):
    parser = IniParser(ini_file, 'utf-8')
    doc = parser.read()
    doc['cache']['ttl'] = '120'
    parser.save(doc)
    again = parser.read()
    assert again == doc
    assert again.comments('db') == []


def test_write_to_new_filename(tmp_path):
    first, second = tmp_path / 'first.ini', tmp_path / 'second.ini'
    doc = IniDocument()
    doc['s']['k'] = 'v'
    parser = IniParser(first)
    parser.write(doc, second)
    assert not first.exists()
    assert second.exists()
    doc['s']['k'] = 'w'
    parser.write(doc)
    assert IniParser(second).read()['s']['k'] == 'w'
    assert not first.exists()


def test_write_text_stream():
    buf = io.StringIO()
    doc = IniDocument()
    doc['s']['k'] = 'v'
    IniParser(buf, parameter=':').write(doc)
    assert buf.getvalue() == "[s]\nk : v\n\n"


def test_unbound_parser():
    parser = IniParser()
    with pytest.raises(ValueError):
        parser.read()
    with pytest.raises(ValueError):
        parser.write(IniDocument())


def test_missing_file_is_logged(tmp_path, caplog):
    load(tmp_path / 'nope.ini')
    assert 'is not a file' in caplog.text
    assert caplog.records[-1].levelname == 'WARNING'
