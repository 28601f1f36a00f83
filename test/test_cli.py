# -*- coding: utf-8; -*-

import os

import rpslkit.cli
from rpslkit.util.text import MockStdio


base_path = os.path.dirname(__file__)


def run(options, relative_paths):
    argv = ['rpslkit'] + options + [os.path.join(base_path, relative_path)
                                    for relative_path in relative_paths]
    stdout = MockStdio()
    stderr = MockStdio()
    args = rpslkit.cli.parse_args(argv)
    exit_status = rpslkit.cli.run_cli(args, stdout, stderr)
    return (exit_status, stdout.buffer.getvalue(), stderr.buffer.getvalue())


def test_basic():
    (code, stdout, stderr) = run([], ['data/ripe_as3333.txt'])
    assert code == 0
    assert stderr == b''
    assert stdout.startswith(
        b'% This is the RIPE Database query service.\n'
        b'% The objects are in RPSL format.\n'
        b'%\n'
    )
    assert (b"% Information related to 'AS3333'\n"
            b'% This query was served by') in stdout
    assert (b'remarks:        Locations\n'
            b'                AMS-IX\n'
            b'                NL-IX\n') in stdout
    assert stdout.endswith(b'source:         RIPE # Filtered\n\n')
    assert b'!' not in stdout


def test_several_files():
    (code, stdout, stderr) = run([], ['data/ripe_as3333.txt',
                                      'data/lacnic.txt'])
    assert code == 0
    assert stderr == b''
    assert b'aut-num:        AS3333\n' in stdout
    assert b'aut-num:        AS28000\n' in stdout
    assert stdout.index(b'AS3333') < stdout.index(b'AS28000')


def test_basic_html():
    (code, stdout, stderr) = run(['-o', 'html'], ['data/ripe_as3333.txt'])
    assert code == 0
    assert stderr == b''
    assert b'<!DOCTYPE html>' in stdout
    assert b'RIPE-NCC-AS' in stdout
    assert b'abuse-mailbox' in stdout
    assert b"Information related to 'AS3333'" in stdout
    assert b'NL-IX' in stdout


def test_malformed():
    (code, stdout, stderr) = run([], ['data/malformed.txt'])
    assert code == 1
    assert stdout == b''
    assert stderr.startswith(b'rpslkit: ')
    assert b'malformed.txt: unexpected space at line 4, column 8' in stderr


def test_skip_malformed():
    (code, stdout, stderr) = run(['--skip-malformed'],
                                 ['data/malformed.txt'])
    assert code == 0
    assert stderr == b''
    assert b'aut-num:        AS64497\n' in stdout
    assert b'aut-num:        AS64496\n' not in stdout
    assert b'\n! ' in stdout
    assert b'line 4, column 8' in stdout

    (code, stdout, stderr) = run(['--skip-malformed', '--fail-on-error'],
                                 ['data/malformed.txt'])
    assert code == 1
    assert b'aut-num:        AS64497\n' in stdout

    (code, stdout, stderr) = run(['--skip-malformed', '--fail-on-error'],
                                 ['data/ripe_as3333.txt'])
    assert code == 0


def test_skip_malformed_html():
    (code, stdout, stderr) = run(['--skip-malformed', '-o', 'html'],
                                 ['data/malformed.txt'])
    assert code == 0
    assert b'AS64497' in stdout
    assert b'class="error"' in stdout


def test_encoding():
    (code, stdout, stderr) = run([], ['data/latin1.txt'])
    assert code == 1
    assert stdout == b''
    assert b'cannot decode as utf-8' in stderr

    (code, stdout, stderr) = run(['--encoding', 'latin-1'],
                                 ['data/latin1.txt'])
    assert code == 0
    assert stderr == b''
    assert u'% Réseaux IP Européens\n'.encode('utf-8') in stdout
    assert b'aut-num:        AS3333\n' in stdout


def test_missing_file():
    (code, stdout, stderr) = run([], ['data/nonexistent.txt'])
    assert code == 1
    assert stdout == b''
    assert stderr.startswith(b'rpslkit: ')
    assert b'nonexistent.txt' in stderr


def test_full_traceback():
    (code, stdout, stderr) = run(['--full-traceback'], ['data/malformed.txt'])
    assert code == 1
    assert b'Traceback (most recent call last)' in stderr
    assert b'ParseError' in stderr
