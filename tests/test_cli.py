import pytest

import busping
from busping import cli, config


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """ Leave the root logger alone; pytest owns it. """

    monkeypatch.setattr(busping.log, 'setup', lambda *args, **kwargs: None)


def test_ping_script(echo_service, capsys):

    server, service = echo_service

    result = cli.ping_main(['-a', server.endpoint, '-b', '-c', '3', 'string:hi', 'int32:0x10'])
    assert result == 0

    output = capsys.readouterr()
    lines = output.out.splitlines()

    assert 'BUSPING_SENT=3;' in lines
    assert 'BUSPING_RECEIVED=3;' in lines
    assert 'BUSPING_TOTAL=6;' in lines
    assert output.err == ''
    assert service.handled == 3


def test_ping_verbose(echo_service, capsys):

    server, service = echo_service

    result = cli.ping_main(['-a', server.endpoint, '-v', '-x', '2', '--clone', 'byte:7'])
    assert result == 0

    output = capsys.readouterr()

    assert output.err.startswith('method call ')
    assert '   array [' in output.err
    assert output.out.startswith('sent       received')
    assert service.last_reply.signature == 'ay'


def test_ping_errors(capsys):

    assert cli.ping_main(['int32:notanumber']) == 1
    assert capsys.readouterr().err.startswith('busping: ERROR: ')

    assert cli.ping_main(['bogus:1']) == 1
    assert "Unknown type 'bogus'" in capsys.readouterr().err

    assert cli.ping_main(['-t', 'error']) == 1
    assert 'busping: ERROR: ' in capsys.readouterr().err

    assert cli.ping_main(['-a', 'nonsense://here', 'string:x']) == 1
    assert "Failed to open connection to 'nonsense://here'" in capsys.readouterr().err


def test_ping_arguments():

    with pytest.raises(SystemExit):
        cli.ping_main(['-x', '0'])

    with pytest.raises(SystemExit):
        cli.ping_main(['-c', '-1'])

    args = cli.ping_parser().parse_args([])

    assert args.destination == config.DEFAULT_NAME
    assert args.path == config.DEFAULT_PATH
    assert args.member == config.DEFAULT_MEMBER
    assert args.count == 1
    assert args.contents_multiply == 1
    assert args.reply_timeout == -1


def test_service_bind_failure(echo_service, capsys):

    server, service = echo_service

    assert cli.service_main(['-a', server.endpoint]) == 1
    assert 'busping-service: ERROR: Failed to get bus name' in capsys.readouterr().err


def test_endpoint(monkeypatch):

    monkeypatch.delenv(config.SESSION_VARIABLE, raising=False)
    monkeypatch.delenv(config.SYSTEM_VARIABLE, raising=False)

    assert config.endpoint() == config.SESSION_ENDPOINT
    assert config.endpoint(system=True) == config.SYSTEM_ENDPOINT
    assert config.endpoint(address='tcp://10.0.0.1:5') == 'tcp://10.0.0.1:5'

    monkeypatch.setenv(config.SESSION_VARIABLE, 'tcp://127.0.0.1:4000')
    assert config.endpoint() == 'tcp://127.0.0.1:4000'
    assert config.endpoint(system=True) == config.SYSTEM_ENDPOINT

    assert config.bus_label() == 'session'
    assert config.bus_label(system=True) == 'system'
    assert config.bus_label(address='x') == 'x'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
