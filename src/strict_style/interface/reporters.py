"""Terminal output for the CLI."""

import typer

from strict_style.use_cases.check_files import CheckResult


class TerminalReporter:
    """Prints one located error per failing file and a summary line."""

    def report(self, result: CheckResult, quiet: bool = False) -> None:
        for file_result in result.violations:
            violation = file_result.violation
            typer.secho(violation.render(), fg=typer.colors.RED, err=True)
        for file_result in result.errors:
            typer.secho(f"{file_result.path}: {file_result.error}", fg=typer.colors.YELLOW, err=True)
        if quiet:
            return
        checked = len(result.results)
        failed = len(result.violations)
        if failed:
            typer.secho(f"{failed} of {checked} file(s) failed the style check.", fg=typer.colors.RED)
        elif result.errors:
            typer.secho(f"{len(result.errors)} file(s) could not be checked.", fg=typer.colors.YELLOW)
        else:
            typer.secho(f"{checked} file(s) checked, no style errors.", fg=typer.colors.GREEN)
