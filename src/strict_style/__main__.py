"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from strict_style.domain.config import ConfigurationLoader
from strict_style.infrastructure.doc_markup import DocMarkupParser
from strict_style.infrastructure.gateways.astroid_gateway import AstroidGateway
from strict_style.infrastructure.services.guidance_service import GuidanceService
from strict_style.interface.cli import CLIDependencies, create_app
from strict_style.interface.reporters import TerminalReporter


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    deps = CLIDependencies(
        config_loader=ConfigurationLoader(),
        ast_gateway=AstroidGateway(),
        doc_parser=DocMarkupParser(),
        guidance_service=GuidanceService(),
        reporter=TerminalReporter(),
    )
    app = create_app(deps)
    app()


if __name__ == "__main__":
    main()
