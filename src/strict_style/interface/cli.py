"""CLI entry points for strict-style - thin controller using Typer."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from strict_style.domain.config import ConfigurationLoader
from strict_style.domain.protocols import DocumentationParserProtocol
from strict_style.infrastructure.gateways.astroid_gateway import AstroidGateway
from strict_style.infrastructure.services.guidance_service import GuidanceService
from strict_style.interface.reporters import TerminalReporter
from strict_style.use_cases.check_files import CheckFilesUseCase


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI, injected at the composition root."""

    config_loader: ConfigurationLoader
    ast_gateway: AstroidGateway
    doc_parser: DocumentationParserProtocol
    guidance_service: GuidanceService
    reporter: TerminalReporter


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        app = typer.Typer(
            name="strict-style",
            help="Fatal documentation and coding-discipline checks for Python modules.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] = typer.Argument(..., help="Files or directories to check (.py and .pyi)."),  # noqa: B008
            annotated_ignores: bool = typer.Option(
                False,
                "--annotated-ignores",
                help="Force ignored expressions (ignore(...) and `_ = ...`) to have a type annotation.",
            ),
            check_doc_comments: bool = typer.Option(
                False,
                "--check-doc-comments",
                help="Restrict comments in interfaces and check documentation comment syntax.",
            ),
            quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors."),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
        ) -> None:
            """Check every file; the first violation of a file fails it."""
            if verbose:
                logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
            config = deps.config_loader.checker_config().merged_with(
                annotated_ignores=annotated_ignores,
                check_comments=check_doc_comments,
            )
            use_case = CheckFilesUseCase(config, deps.ast_gateway, deps.doc_parser)
            result = use_case.execute(paths)
            deps.reporter.report(result, quiet=quiet)
            raise typer.Exit(code=result.exit_code)

        @app.command()
        def explain(
            rule: str = typer.Argument(..., help="Message id (E9804) or symbol (ignored-value-missing-annotation)."),
        ) -> None:
            """Print what a rule enforces and how to fix a violation."""
            entry = deps.guidance_service.get_entry(rule)
            if entry is None:
                typer.secho(f"Unknown rule: {rule}", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=2)
            msgid: Optional[str] = deps.guidance_service.get_msgid(entry.get("symbol", rule))
            typer.echo(f"{msgid or rule} ({entry.get('symbol', rule)}): {entry.get('display_name', '')}")
            typer.echo(deps.guidance_service.get_manual_instructions(rule))
            for reference in entry.get("references", []):
                typer.echo(f"See: {reference}")

        return app


def create_app(deps: CLIDependencies) -> typer.Typer:
    return CLIAppFactory.create_app(deps)
