import io
import os
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from unittest import TestCase

from termhisto.cli import make_parser, run, main
from termhisto.histo import MalformedInputException, EmptySourceException, ConfigurationException
from termhisto.options import Options


def options_for(*argv):
    return Options(make_parser().parse_args(list(argv)))


class TestCli(TestCase):
    def setUp(self):
        self._dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self._dir.cleanup()

    def write(self, name, text):
        pathname = os.path.join(self._dir.name, name)
        with open(pathname, 'w') as f:
            f.write(text)
        return pathname

    def test_single_file(self):
        lines = [str(i) for i in range(10) for _ in range(i * 2)]
        pathname = self.write('staircase.txt', '\n'.join(lines) + '\n')
        report = run(options_for('--graph-width', '40', pathname))
        self.assertTrue(report.startswith(' 0.00 ~  1.00   0 |\n'))
        self.assertTrue(report.endswith(' 9.00 ~ 10.00  18 |*********************\n'))
        self.assertEqual(len(report.splitlines()), 10)

    def test_stdin(self):
        stdin = io.StringIO('1\n2\n2\n 3.5 \n')
        report = run(options_for('--graph-width', '40', '--bucket-count', '2', '-'), stdin=stdin)
        self.assertEqual(report, ' 0.00 ~  5.00  4 |' + '*' * 22 + '\n'
                                 ' 5.00 ~ 10.00  0 |\n')

    def test_fixed_axis_tallies(self):
        pathname = self.write('values.txt', '-1\n0.5\n1.5\n20\n')
        report = run(options_for('--graph-width', '40', '--bucket-count', '2', '--axis-max', '2',
                                 '--fixed-axis', pathname))
        self.assertEqual(report, ' 0.00 ~ 1.00  1 |' + '*' * 23 + '\n'
                                 ' 1.00 ~ 2.00  1 |' + '*' * 23 + '\n'
                                 'out of range  2 |\n')

    def test_fixed_axis_drop(self):
        pathname = self.write('values.txt', '-1\n0.5\n1.5\n20\n')
        report = run(options_for('--graph-width', '40', '--bucket-count', '2', '--axis-max', '2',
                                 '--fixed-axis', '--out-of-range', 'drop', pathname))
        self.assertEqual(len(report.splitlines()), 2)

    def test_auto_axis(self):
        pathname = self.write('values.txt', '0.013\n0.1\n0.21\n')
        options = options_for('--graph-width', '60', '--bucket-count', '5', '--axis-min', 'auto',
                              '--axis-max', 'auto', '--precision', '3', pathname)
        lines = run(options).splitlines()
        self.assertTrue(lines[0].startswith('0.012 ~ 0.054'))
        self.assertTrue(lines[4].startswith('0.178 ~ 0.220'))

    def test_multiple_files(self):
        a = self.write('a.txt', '1\n2\n3\n')
        b = self.write('b.txt', '7\n8\n9\n9\n')
        lines = run(options_for('--graph-width', '80', '--bucket-count', '5', a, b)).splitlines()
        self.assertEqual(len(lines), 6)
        self.assertIn('a.txt', lines[0])
        self.assertIn('b.txt', lines[0])
        self.assertTrue(lines[1].startswith(' 0.00 ~  2.00  1 |'))

    def test_significant_digits(self):
        pathname = self.write('values.txt', '1\n')
        report = run(options_for('--graph-width', '40', '--bucket-count', '1', '--max-significant-digits', '2',
                                 pathname))
        self.assertEqual(report, '0.0e+00 ~ 1.0e+01  1 |' + '*' * 18 + '\n')

    def test_malformed(self):
        pathname = self.write('bad.txt', '1\nabc\n3\n')
        with self.assertRaises(MalformedInputException) as cm:
            run(options_for(pathname))
        self.assertIn(':2:', str(cm.exception))

    def test_empty_source(self):
        pathname = self.write('empty.txt', '')
        with self.assertRaises(EmptySourceException) as cm:
            run(options_for(pathname))
        self.assertIn(pathname, str(cm.exception))

    def test_invalid_options(self):
        with self.assertRaises(ConfigurationException):
            options_for('--bucket-count', '0')
        with self.assertRaises(ConfigurationException):
            options_for('--bar-char', '')
        with self.assertRaises(ConfigurationException):
            options_for('--min-significant-digits', '3', '--max-significant-digits', '2')

    def test_main_exit_status(self):
        good = self.write('good.txt', '1\n2\n')
        bad = self.write('bad.txt', 'x\n')
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(['--graph-width', '40', good]), 0)
        self.assertTrue(out.getvalue().endswith('\n'))

        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main([bad]), 1)
            self.assertEqual(main(['--graph-width', '20', good]), 1)
            self.assertEqual(main([os.path.join(self._dir.name, 'missing.txt')]), 1)
        self.assertEqual(out.getvalue(), '')

    def test_invalid_utf8(self):
        pathname = os.path.join(self._dir.name, 'binary.txt')
        with open(pathname, 'wb') as f:
            f.write(b'1\n\xff\xfe\n2\n')
        with self.assertRaises(MalformedInputException) as cm:
            run(options_for(pathname))
        self.assertIn('not valid UTF-8', str(cm.exception))

        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main([pathname]), 1)
        self.assertEqual(out.getvalue(), '')

    def test_non_finite_values(self):
        for text in ['1\ninf\n', '1\n-inf\n', '1\nnan\n']:
            pathname = self.write('values.txt', text)
            with self.assertRaises(MalformedInputException) as cm:
                run(options_for('--axis-max', 'auto', pathname))
            self.assertIn(':2:', str(cm.exception))

        stdin = io.StringIO('1\nNaN\n')
        with self.assertRaises(MalformedInputException):
            run(options_for('-'), stdin=stdin)

    def test_non_finite_axis(self):
        pathname = self.write('values.txt', '1\n2\n')
        with self.assertRaises(ConfigurationException):
            run(options_for('--axis-max', 'inf', pathname))
        out = io.StringIO()
        with redirect_stdout(out):
            self.assertEqual(main(['--axis-min=-inf', '--graph-width', '40', pathname]), 1)
        self.assertEqual(out.getvalue(), '')

    def test_out_of_range_choices(self):
        self.assertEqual(make_parser().parse_args(['--out-of-range', 'drop']).out_of_range, 'drop')
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                make_parser().parse_args(['--out-of-range', 'clip'])
