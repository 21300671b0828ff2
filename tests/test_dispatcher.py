"""Tests for running the selected status action."""

import errno
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from shellstatus.dispatcher import (
    NOT_A_FUNCTION,
    STANDARD_INPUT,
    TEST_FEATURE_NOT_RECOGNIZED,
    TEST_FEATURE_OFF,
    TEST_FEATURE_ON,
    Dispatcher,
    expected_argument_count,
)
from shellstatus.errors import InvalidJobControlModeError, UnexpectedArgumentCountError
from shellstatus.job_control import get_job_control_mode, set_job_control_mode
from shellstatus.models import Action, JobControlMode, StatusOptions
from shellstatus.session import IoStreams, ScriptContext, SessionFlags, StatusEnvironment


def run(env: StatusEnvironment, action: Action, args: list[str] | None = None, **options) -> tuple[int, str, str]:
    streams = IoStreams()
    code = Dispatcher('status', env, streams).dispatch(StatusOptions(action=action, **options), args or [])
    return code, streams.out.getvalue(), streams.err.getvalue()


class TestArgumentCount:
    """Tests for the argument-count check that runs before every action."""

    @pytest.mark.parametrize(
        'action',
        [action for action in Action if action not in (Action.TEST_FEATURE, Action.SET_JOB_CONTROL)],
    )
    def test_zero_argument_actions_reject_extras(self, env: StatusEnvironment, action: Action) -> None:
        """Test that actions without arguments refuse one."""
        with pytest.raises(UnexpectedArgumentCountError) as exc_info:
            run(env, action, ['extra'])

        assert exc_info.value.expected == 0
        assert exc_info.value.actual == 1

    def test_message_names_action(self, env: StatusEnvironment) -> None:
        """Test the rendered message."""
        with pytest.raises(UnexpectedArgumentCountError) as exc_info:
            run(env, Action.BASENAME, ['a', 'b'])

        assert exc_info.value.render('status') == 'status: basename: expected 0 arguments; got 2'

    @pytest.mark.parametrize('args', [[], ['a', 'b']])
    def test_test_feature_needs_one(self, env: StatusEnvironment, args: list[str]) -> None:
        with pytest.raises(UnexpectedArgumentCountError) as exc_info:
            run(env, Action.TEST_FEATURE, args)

        assert exc_info.value.render('status') == f'status: test-feature: expected 1 arguments; got {len(args)}'

    def test_expected_count(self) -> None:
        """Test the count table, including the flag form of job-control."""
        assert expected_argument_count(StatusOptions(action=Action.FEATURES)) == 0
        assert expected_argument_count(StatusOptions(action=Action.TEST_FEATURE)) == 1
        assert expected_argument_count(StatusOptions(action=Action.SET_JOB_CONTROL)) == 1
        assert (
            expected_argument_count(
                StatusOptions(
                    action=Action.SET_JOB_CONTROL,
                    requested_job_control_mode=JobControlMode.NONE,
                ),
            )
            == 0
        )


class TestSummary:
    """Tests for the default action."""

    def test_login_shell_summary(self, env: StatusEnvironment, stack_trace: str) -> None:
        code, out, err = run(env, Action.UNDEFINED)

        assert code == 0
        assert err == ''
        assert out == 'This is a login shell\nJob control: Only on interactive jobs\n' + stack_trace

    @pytest.mark.parametrize(
        ('mode', 'wording'),
        [
            (JobControlMode.ALL, 'Always'),
            (JobControlMode.INTERACTIVE, 'Only on interactive jobs'),
            (JobControlMode.NONE, 'Never'),
        ],
    )
    def test_non_login_summary(self, context: ScriptContext, mode: JobControlMode, wording: str) -> None:
        set_job_control_mode(mode)
        env = StatusEnvironment(parser=context, session=SessionFlags(login=False))

        _code, out, _err = run(env, Action.UNDEFINED)

        assert out.splitlines()[:2] == ['This is not a login shell', f'Job control: {wording}']


class TestSetJobControl:
    """Tests for the job-control action."""

    def test_flag_supplied_mode(self, env: StatusEnvironment) -> None:
        code, out, _err = run(env, Action.SET_JOB_CONTROL, requested_job_control_mode=JobControlMode.NONE)

        assert code == 0
        assert out == ''
        assert get_job_control_mode() is JobControlMode.NONE

    def test_positional_mode(self, env: StatusEnvironment) -> None:
        code, _out, _err = run(env, Action.SET_JOB_CONTROL, ['full'])

        assert code == 0
        assert get_job_control_mode() is JobControlMode.ALL

    def test_flag_mode_rejects_positional(self, env: StatusEnvironment) -> None:
        with pytest.raises(UnexpectedArgumentCountError):
            run(env, Action.SET_JOB_CONTROL, ['full'], requested_job_control_mode=JobControlMode.NONE)
        assert get_job_control_mode() is JobControlMode.INTERACTIVE

    def test_invalid_positional_mode(self, env: StatusEnvironment) -> None:
        with pytest.raises(InvalidJobControlModeError):
            run(env, Action.SET_JOB_CONTROL, ['always'])
        assert get_job_control_mode() is JobControlMode.INTERACTIVE


class TestFeatures:
    """Tests for features and test-feature."""

    def test_features_are_column_aligned(self, env: StatusEnvironment) -> None:
        code, out, _err = run(env, Action.FEATURES)

        assert code == 0
        assert out.splitlines() == [
            'stderr-nocaret          on  3.0 ^ no longer redirects stderr',
            'qmark-noglob            off 3.0 ? no longer globs',
            "regex-easyesc           on  3.1 string replace -r needs fewer \\'s",
            'ampersand-nobg-in-token on  3.4 & only backgrounds if followed by a separator',
        ]

    @pytest.mark.parametrize(
        ('name', 'expected'),
        [
            ('stderr-nocaret', TEST_FEATURE_ON),
            ('qmark-noglob', TEST_FEATURE_OFF),
            ('no-such-feature', TEST_FEATURE_NOT_RECOGNIZED),
        ],
    )
    def test_test_feature(self, env: StatusEnvironment, name: str, expected: int) -> None:
        code, out, err = run(env, Action.TEST_FEATURE, [name])

        assert code == expected
        assert out == ''
        assert err == ''


class TestFilenames:
    """Tests for filename, dirname and basename."""

    @pytest.mark.parametrize(
        ('action', 'expected'),
        [
            (Action.FILENAME, '/home/user/tool.fish'),
            (Action.DIRNAME, '/home/user'),
            (Action.BASENAME, 'tool.fish'),
        ],
    )
    def test_with_file(self, env: StatusEnvironment, action: Action, expected: str) -> None:
        _code, out, _err = run(env, action)
        assert out == f'{expected}\n'

    @pytest.mark.parametrize('action', [Action.FILENAME, Action.DIRNAME, Action.BASENAME])
    @pytest.mark.parametrize('filename', [None, ''])
    def test_standard_input(self, session: SessionFlags, action: Action, filename: str | None) -> None:
        """Test that reading from stdin prints the placeholder, not an empty line."""
        env = StatusEnvironment(parser=ScriptContext(filename=filename), session=session)

        _code, out, _err = run(env, action)

        assert out == f'{STANDARD_INPUT}\n'


class TestFunctionAndLines:
    """Tests for function, line-number and stack-trace."""

    @pytest.mark.parametrize(('level', 'expected'), [(1, 'inner'), (2, 'outer'), (3, 'main'), (4, NOT_A_FUNCTION)])
    def test_function_level(self, env: StatusEnvironment, level: int, expected: str) -> None:
        _code, out, _err = run(env, Action.FUNCTION, level=level)
        assert out == f'{expected}\n'

    def test_level_is_passed_through(self, session: SessionFlags, mocker: MockerFixture) -> None:
        """Test that the level reaches the interpreter unchanged."""
        parser = mocker.Mock()
        parser.get_function_name.return_value = 'deep'
        env = StatusEnvironment(parser=parser, session=session)

        _code, out, _err = run(env, Action.FUNCTION, level=7)

        parser.get_function_name.assert_called_once_with(7)
        assert out == 'deep\n'

    def test_level_zero_names_breakpoint_function(self, session: SessionFlags) -> None:
        env = StatusEnvironment(
            parser=ScriptContext(functions=['broken'], at_breakpoint=True),
            session=session,
        )
        assert run(env, Action.FUNCTION, level=0)[1] == 'broken\n'

    def test_line_number_ignores_level(self, env: StatusEnvironment) -> None:
        _code, out, _err = run(env, Action.LINE_NUMBER, level=3)
        assert out == '12\n'

    def test_stack_trace_is_verbatim(self, env: StatusEnvironment, stack_trace: str) -> None:
        _code, out, _err = run(env, Action.STACK_TRACE)
        assert out == stack_trace


class TestProbes:
    """Tests for the boolean probes."""

    @pytest.mark.parametrize(
        ('action', 'expected'),
        [
            (Action.IS_LOGIN, 0),
            (Action.IS_INTERACTIVE, 1),
            (Action.IS_BLOCK, 1),
            (Action.IS_BREAKPOINT, 1),
            (Action.IS_COMMAND_SUBSTITUTION, 1),
            (Action.IS_FULL_JOB_CONTROL, 1),
            (Action.IS_INTERACTIVE_JOB_CONTROL, 0),
            (Action.IS_NO_JOB_CONTROL, 1),
        ],
    )
    def test_probe_exit_codes(self, env: StatusEnvironment, action: Action, expected: int) -> None:
        code, out, err = run(env, action)

        assert code == expected
        assert out == ''
        assert err == ''

    def test_probes_follow_context(self) -> None:
        env = StatusEnvironment(
            parser=ScriptContext(in_block=True, at_breakpoint=True, is_subshell=True),
            session=SessionFlags(login=False, interactive=True),
        )

        assert run(env, Action.IS_BLOCK)[0] == 0
        assert run(env, Action.IS_BREAKPOINT)[0] == 0
        assert run(env, Action.IS_COMMAND_SUBSTITUTION)[0] == 0
        assert run(env, Action.IS_INTERACTIVE)[0] == 0
        assert run(env, Action.IS_LOGIN)[0] == 1

    def test_job_control_probes_follow_mode(self, env: StatusEnvironment) -> None:
        set_job_control_mode(JobControlMode.ALL)
        assert run(env, Action.IS_FULL_JOB_CONTROL)[0] == 0
        assert run(env, Action.IS_INTERACTIVE_JOB_CONTROL)[0] == 1

        set_job_control_mode(JobControlMode.NONE)
        assert run(env, Action.IS_NO_JOB_CONTROL)[0] == 0
        assert run(env, Action.IS_FULL_JOB_CONTROL)[0] == 1


class TestCurrentCommand:
    """Tests for current-command and current-commandline."""

    def test_current_command(self, env: StatusEnvironment) -> None:
        assert run(env, Action.CURRENT_COMMAND)[1] == 'tool\n'

    def test_current_command_falls_back_to_program(self, session: SessionFlags) -> None:
        env = StatusEnvironment(parser=ScriptContext(), session=session, program_name='myshell')
        assert run(env, Action.CURRENT_COMMAND)[1] == 'myshell\n'

    def test_current_commandline(self, env: StatusEnvironment) -> None:
        assert run(env, Action.CURRENT_COMMANDLINE)[1] == 'tool --flag value\n'

    def test_empty_commandline_does_not_fall_back(self, session: SessionFlags) -> None:
        env = StatusEnvironment(parser=ScriptContext(), session=session)
        assert run(env, Action.CURRENT_COMMANDLINE)[1] == '\n'


class TestExecutablePath:
    """Tests for fish-path."""

    def test_relative_path_is_printed_as_is(self, env: StatusEnvironment) -> None:
        code, out, err = run(env, Action.FISH_PATH)

        assert code == 0
        assert out == 'bin/fish\n'
        assert err == ''

    def test_absolute_path_is_canonicalized(self, tmp_path: Path, session: SessionFlags) -> None:
        real = tmp_path / 'real-fish'
        real.write_text('')
        link = tmp_path / 'fish'
        link.symlink_to(real)
        env = StatusEnvironment(parser=ScriptContext(), session=session, executable_path=lambda _name: str(link))

        _code, out, _err = run(env, Action.FISH_PATH)

        assert out == f'{real.resolve()}\n'

    def test_missing_absolute_path_is_printed_unchanged(self, tmp_path: Path, session: SessionFlags) -> None:
        missing = tmp_path / 'gone' / 'fish'
        env = StatusEnvironment(parser=ScriptContext(), session=session, executable_path=lambda _name: str(missing))

        _code, out, _err = run(env, Action.FISH_PATH)

        assert out == f'{missing}\n'

    def test_resolution_failure_is_reported_not_fatal(self, session: SessionFlags) -> None:
        def fail(_name: str) -> str:
            raise PermissionError(errno.EACCES, 'Permission denied')

        env = StatusEnvironment(parser=ScriptContext(), session=session, executable_path=fail)

        code, out, err = run(env, Action.FISH_PATH)

        assert code == 0
        assert out == ''
        assert err == "status: Could not get executable path: 'Permission denied'\n"

    def test_empty_path_is_reported(self, session: SessionFlags) -> None:
        env = StatusEnvironment(parser=ScriptContext(), session=session, executable_path=lambda _name: '')

        code, out, err = run(env, Action.FISH_PATH)

        assert code == 0
        assert out == ''
        assert err.startswith('status: Could not get executable path:')

    def test_program_name_is_looked_up(self, session: SessionFlags, mocker: MockerFixture) -> None:
        resolver = mocker.Mock(return_value='fish')
        env = StatusEnvironment(parser=ScriptContext(), session=session, executable_path=resolver, program_name='fish')

        run(env, Action.FISH_PATH)

        resolver.assert_called_once_with('fish')
