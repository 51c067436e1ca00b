import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout, redirect_stderr
from typing import Optional, Tuple
from unittest import mock

from ..version import __version__
from .cli import invoke_cli
from .exceptions import ConfigurationException


class CliTest(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)
        self.ini_path = os.path.join(self.directory.name, 'bitunit.ini')
        self.write_ini('')
        patcher = mock.patch(
                'bitunit.cli.config.GLOBAL_INI_PATH',
                os.path.join(self.directory.name, 'global.ini')
            )
        patcher.start()
        self.addCleanup(patcher.stop)

    def write_ini(self, content: str) -> None:
        with open(self.ini_path, 'w', encoding='utf-8') as file:
            file.write(content)

    def invoke(
                self,
                command: str,
                *arguments: str,
                stdin: Optional[str] = None
            ) -> Tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        args = [command, '--configuration', self.ini_path, *arguments]
        stream = io.StringIO(stdin) if stdin is not None else io.StringIO()
        with mock.patch('sys.stdin', stream), \
                redirect_stdout(stdout), \
                redirect_stderr(stderr):
            code = invoke_cli(args)
        return code, stdout.getvalue(), stderr.getvalue()

    def test_convert(self):
        code, output, _ = self.invoke('convert', '--to-unit', 'kb', '1500')
        self.assertEqual(code, 0)
        self.assertEqual(output, '1\n')

    def test_convert_multiple_amounts(self):
        code, output, _ = self.invoke(
                'convert',
                '-f', 'MiB',
                '-t', 'B',
                '1', '16', '1,024'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '1048576\n16777216\n1073741824\n')

    def test_convert_negative_amount(self):
        code, output, _ = self.invoke('convert', '-t', 'B', '8', '-8')
        self.assertEqual(code, 1)
        self.assertEqual(output, '1\n')

    def test_convert_overflow(self):
        code, output, _ = self.invoke(
                'convert',
                '-f', 'PiB',
                '-t', 'b',
                '18446744073709551615'
            )
        self.assertEqual(code, 1)
        self.assertEqual(output, '')

    def test_convert_requires_target_unit(self):
        code, _, errors = self.invoke('convert', '1')
        self.assertEqual(code, 1)
        self.assertIn('A target unit must be specified', errors)

    def test_convert_unknown_unit(self):
        code, _, errors = self.invoke('convert', '-t', 'kilobytes', '1')
        self.assertEqual(code, 1)
        self.assertIn('Unrecognized unit', errors)

    def test_convert_invalid_amount(self):
        code, _, errors = self.invoke('convert', '-t', 'kB', '1.5')
        self.assertEqual(code, 1)
        self.assertIn('Invalid amount', errors)

    def test_convert_from_stdin(self):
        code, output, _ = self.invoke(
                'convert',
                '-f', 'B',
                '-t', 'b',
                stdin='1 2\n3\n'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '8\n16\n24\n')

    def test_convert_without_amounts(self):
        code, _, errors = self.invoke('convert', '-t', 'b', '--no-read-stdin')
        self.assertEqual(code, 1)
        self.assertIn('At least one amount must be specified', errors)

    def test_format(self):
        code, output, _ = self.invoke('format', '999', '1000', '1500000')
        self.assertEqual(code, 0)
        self.assertEqual(output, '999 b\n1 kb\n1.5 Mb\n')

    def test_format_fraction_digits(self):
        code, output, _ = self.invoke(
                'format',
                '--minimum-fraction-digits', '2',
                '999', '1000'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '999.00 b\n1.00 kb\n')

    def test_format_invalid_fraction_digits(self):
        code, _, errors = self.invoke(
                'format',
                '--minimum-fraction-digits', '3',
                '1'
            )
        self.assertEqual(code, 1)
        self.assertIn('fraction digits', errors)

    def test_format_target_family(self):
        code, output, _ = self.invoke(
                'format',
                '-s', 'B',
                '-t', 'binary-byte',
                '1536'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '1.5 KiB\n')

    def test_format_grouping(self):
        code, output, _ = self.invoke(
                'format',
                '-s', 'PB',
                '-t', 'decimal-byte',
                '--grouping',
                '1234567'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '1,234,567 PB\n')

    def test_format_negative_amount(self):
        code, output, _ = self.invoke('format', '-5')
        self.assertEqual(code, 1)
        self.assertEqual(output, '')

    def test_format_uses_ini_values(self):
        self.write_ini(
                '[FORMAT]\n'
                'source_unit = B\n'
                'target_family = binary-byte\n'
            )
        code, output, _ = self.invoke('format', '1536')
        self.assertEqual(code, 0)
        self.assertEqual(output, '1.5 KiB\n')

    def test_cli_values_override_ini_values(self):
        self.write_ini(
                '[FORMAT]\n'
                'source_unit = B\n'
                'target_family = binary-byte\n'
            )
        code, output, _ = self.invoke(
                'format',
                '--target-family', 'decimal-byte',
                '1536'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '1.54 kB\n')

    def test_format_from_stdin(self):
        code, output, _ = self.invoke(
                'format',
                '--read-stdin',
                stdin='1000 2000\n3000\n'
            )
        self.assertEqual(code, 0)
        self.assertEqual(output, '1 kb\n2 kb\n3 kb\n')

    def test_units(self):
        code, output, _ = self.invoke('units', '--family', 'binary-byte')
        self.assertEqual(code, 0)
        lines = output.splitlines()
        self.assertEqual(len(lines), 7)
        self.assertTrue(lines[0].startswith('Unit'))
        self.assertTrue(lines[1].startswith('byte'))
        self.assertIn('PiB', lines[6])
        self.assertIn('9007199254740992', lines[6])

    def test_all_units(self):
        code, output, _ = self.invoke('units')
        self.assertEqual(code, 0)
        self.assertEqual(len(output.splitlines()), 23)

    def test_version(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as exit:
            invoke_cli(['--version'])
        self.assertEqual(exit.exception.code, 0)
        self.assertEqual(stdout.getvalue(), f'bitunit {__version__}\n')

    def test_help_option(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout), self.assertRaises(SystemExit) as exit:
            invoke_cli(['format', '--help'])
        self.assertEqual(exit.exception.code, 0)
        output = stdout.getvalue()
        self.assertIn('usage: bitunit format', output)
        self.assertIn('--target-family', output)
        self.assertIn('--no-grouping', output)
        self.assertIn('examples:', output)

    def test_unknown_command(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as exit:
            invoke_cli(['parse', '1 MB'])
        self.assertEqual(exit.exception.code, 2)
        self.assertIn('invalid choice', stderr.getvalue())

    def test_no_command(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            code = invoke_cli([])
        self.assertEqual(code, 0)
        self.assertIn('convert', stdout.getvalue())
        self.assertIn('units', stdout.getvalue())

    def test_missing_configuration_file(self):
        os.remove(self.ini_path)
        code, _, errors = self.invoke('units')
        self.assertEqual(code, 1)
        self.assertIn('Configuration file not found', errors)

    def test_unknown_ini_settings_are_ignored(self):
        self.write_ini(
                '[FORMAT]\n'
                'colour = true\n'
            )
        code, output, errors = self.invoke('format', '1000')
        self.assertEqual(code, 0)
        self.assertEqual(output, '1 kb\n')
        self.assertIn("Ignoring unknown setting 'colour' in [FORMAT]", errors)

    def test_invalid_ini_value(self):
        self.write_ini(
                '[FORMAT]\n'
                'target_family = hexadecimal\n'
            )
        code, _, errors = self.invoke('format', '1000')
        self.assertEqual(code, 1)
        self.assertIn('Invalid value for target_family', errors)

    def test_default_section_applies_to_every_command(self):
        self.write_ini(
                '[DEFAULT]\n'
                'read_stdin = no\n'
            )
        code, _, errors = self.invoke('convert', '-t', 'b', stdin='1\n')
        self.assertEqual(code, 1)
        self.assertIn('At least one amount must be specified', errors)

    def test_debug_reraises_errors(self):
        with self.assertRaises(ConfigurationException):
            self.invoke('format', '--debug', '--maximum-fraction-digits',
                        '-1', '1')

    def test_errors_are_prefixed_without_color(self):
        code, _, errors = self.invoke('convert', '--no-color', '-t', 'B',
                                      '-8')
        self.assertEqual(code, 1)
        self.assertIn('ERROR: Unable to convert -8', errors)


if __name__ == '__main__':
    unittest.main()
