import pytest

from iniio import MalformedIniFile, write_profile_string


@pytest.fixture
def ini(tmp_path):
    path = tmp_path / 'conf.ini'
    path.write_text(
        '[users]\nalice=1\nalice=shadowed\n\n[env]\ncloud=false\n')
    return path


def test_replace_first_occurrence(ini):
    assert write_profile_string('users', 'alice', '2', str(ini))
    assert ini.read_text() == \
        '[users]\nalice=2\nalice=shadowed\n\n[env]\ncloud=false\n'


def test_append_before_trailing_blank_lines(ini):
    assert write_profile_string('users', 'bob', '3', str(ini))
    assert ini.read_text() == \
        '[users]\nalice=1\nalice=shadowed\nbob=3\n\n[env]\ncloud=false\n'


def test_new_section_is_appended(ini):
    assert write_profile_string('new', 'k', 'a=b', str(ini))
    assert ini.read_text().endswith('cloud=false\n[new]\nk=a=b\n')


def test_missing_file_is_created(tmp_path):
    path = tmp_path / 'fresh.ini'
    assert write_profile_string('s', 'k', 'v', str(path))
    assert path.read_text() == '[s]\nk=v\n'


def test_none_value_removes_every_occurrence(ini):
    assert write_profile_string('users', 'alice', None, str(ini))
    assert ini.read_text() == '[users]\n\n[env]\ncloud=false\n'


def test_removing_absent_key_is_fine(ini):
    before = ini.read_text()
    assert write_profile_string('users', 'nobody', None, str(ini))
    assert write_profile_string('nowhere', 'nobody', None, str(ini))
    assert ini.read_text() == before


def test_none_key_removes_section(ini):
    assert write_profile_string('users', None, None, str(ini))
    assert ini.read_text() == '[env]\ncloud=false\n'


@pytest.mark.parametrize('section, key, value', [
    ('bad]', 'k', 'v'),
    ('', 'k', 'v'),
    ('s', 'k=x', 'v'),
    ('s', ';k', 'v'),
    ('s', '', 'v'),
    ('s', 'k', 'multi\nline'),
])
def test_rejects_what_cannot_be_read_back(ini, section, key, value):
    with pytest.raises(ValueError):
        write_profile_string(section, key, value, str(ini))


def test_malformed_target(tmp_path):
    path = tmp_path / 'bad.ini'
    path.write_text('orphan=1\n')
    with pytest.raises(MalformedIniFile):
        write_profile_string('s', 'k', 'v', str(path))
    assert path.read_text() == 'orphan=1\n'


def test_crlf_line_endings_are_kept(tmp_path):
    path = tmp_path / 'dos.ini'
    path.write_bytes(b'[users]\r\nalice=1\r\n\r\n[env]\r\ncloud=false\r\n')
    assert write_profile_string('users', 'bob', '2', str(path))
    assert write_profile_string('env', 'cloud', 'true', str(path))
    assert path.read_bytes() == \
        b'[users]\r\nalice=1\r\nbob=2\r\n\r\n[env]\r\ncloud=true\r\n'
