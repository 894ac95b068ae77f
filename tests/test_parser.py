from io import StringIO

import pytest

from iniio import IniParser, MalformedIniFile, RawSectionBlock


def test_readstream_blocks():
    blocks = IniParser.readstream(StringIO(
        '\n[users]\nalice=1\n\n; who\n[env]\ncloud=false\n'))
    assert [i.header for i in blocks] == ['[users]', '[env]']
    assert blocks[0].lines == ['alice=1', '', '; who']
    assert blocks[1].lines == ['cloud=false']
    assert [i.name for i in blocks] == ['users', 'env']


def test_repeated_headers_stay_separate():
    blocks = IniParser.readstream(StringIO('[a]\nx=1\n[a]\nx=2\n'))
    assert len(blocks) == 2
    assert blocks[0].lines == ['x=1']
    assert blocks[1].lines == ['x=2']


def test_content_before_header_is_malformed():
    with pytest.raises(MalformedIniFile):
        IniParser.readstream(StringIO('key=value\n[section]\n'))
    with pytest.raises(OSError):
        IniParser.readstream(StringIO('\n  \n[section]\n'))


def test_header_without_closing_bracket_warns():
    with pytest.warns(UserWarning):
        blocks = IniParser.readstream(StringIO('[broken\nk=v\n'))
    assert blocks[0].name is None
    assert blocks[0].lines == ['k=v']


def test_name_is_text_before_first_closing_bracket():
    assert RawSectionBlock('[a]:[b] ; c').name == 'a'
    assert RawSectionBlock('[]').name == ''


def test_read_falls_back_to_detected_codec(tmp_path):
    path = tmp_path / 'wide.ini'
    path.write_bytes('[节]\n键=值\n'.encode('utf-16'))
    parser = IniParser(path, 'utf-8')
    blocks = parser.read()
    assert [i.name for i in blocks] == ['节']
    assert blocks[0].lines == ['键=值']
    assert parser.encoding.lower().startswith('utf-16')


def test_write_roundtrips_raw_lines(tmp_path):
    path = tmp_path / 'out.ini'
    parser = IniParser(path)
    parser.write([
        RawSectionBlock('[a]', ['k=v', '', '; note']),
        RawSectionBlock('[b]', ['x=y=z']),
    ])
    assert path.read_text() == '[a]\nk=v\n\n; note\n[b]\nx=y=z\n'
    assert [i.lines for i in parser.read()] == [['k=v', '', '; note'],
                                                ['x=y=z']]
    assert list(tmp_path.iterdir()) == [path]


def test_read_remembers_crlf(tmp_path):
    path = tmp_path / 'dos.ini'
    path.write_bytes(b'[a]\r\nk=v\r\n')
    parser = IniParser(path)
    assert parser.newline == '\n'
    blocks = parser.read()
    assert blocks[0].lines == ['k=v']
    assert parser.newline == '\r\n'
    parser.write(blocks)
    assert path.read_bytes() == b'[a]\r\nk=v\r\n'
