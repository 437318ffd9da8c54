import click
import logging
from pathlib import Path
from pydantic import BaseModel

from flowdeploy.application.config_loader import load_config, load_options
from flowdeploy.application.deployment_check import check_workflow
from flowdeploy.application.workflow_loader import load_workflow
from flowdeploy.domain.errors import WorkflowLoadError
from flowdeploy.domain.models.diagnostics import NormalizationOptions
from flowdeploy.interface.cli.output_models import ValidateOutput, WorkflowValidationResult

logger = logging.getLogger(__name__)


def _json_emit(model: BaseModel) -> None:
    # Single-line JSON, omit None fields.
    click.echo(model.model_dump_json(exclude_none=True), nl=True)


def _get_json_mode(ctx: click.Context) -> bool:
    obj = ctx.obj or {}
    return bool(obj.get("json", False))


def _validate_path(path: Path, options: NormalizationOptions) -> WorkflowValidationResult:
    """Load and check one workflow file; load failures become failed results."""
    try:
        workflow = load_workflow(path)
    except WorkflowLoadError as e:
        logger.warning(f"Could not load workflow: {e}")
        return WorkflowValidationResult(path=str(path), success=False, error=str(e))

    result = check_workflow(workflow, options)
    return WorkflowValidationResult(
        path=str(path),
        success=result.success,
        errors=[d.message for d in result.errors],
        warnings=[d.message for d in result.warnings],
    )


@click.group(help="Workflow deployment validator.")
@click.option("--json", "json_output", is_flag=True, help="Emit machine-readable JSON on stdout.")
@click.pass_context
def cli(ctx: click.Context, json_output: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj["json"] = bool(json_output)


@cli.command("validate")
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--fail-on-warnings/--no-fail-on-warnings",
    "fail_on_warnings",
    default=None,
    help="Treat warnings as failures (overrides config).",
)
@click.pass_context
def validate_cmd(
    ctx: click.Context,
    paths: tuple[Path, ...],
    fail_on_warnings: bool | None,
) -> None:
    """Check normalized workflow documents before deployment.

    Examples:
        flowdeploy validate workflows/account-opening.json
        flowdeploy --json validate workflows/*.json
        flowdeploy validate --fail-on-warnings payment.yaml
    """
    try:
        cfg = load_config(project_root=Path.cwd(), user_home=Path.home())
        options = load_options(cfg)

        # CLI flag overrides config
        if fail_on_warnings is not None:
            options = options.model_copy(update={"fail_on_warnings": fail_on_warnings})

        results = [_validate_path(path, options) for path in paths]

        all_passed = all(r.success for r in results)
        exit_code = 0 if all_passed else 1

        if _get_json_mode(ctx):
            _json_emit(
                ValidateOutput(
                    exit_code=exit_code,
                    results=results,
                    all_passed=all_passed,
                )
            )
            raise click.exceptions.Exit(exit_code)

        # Plain text output
        for r in results:
            status = "OK" if r.success else "FAILED"
            if r.error:
                click.echo(f"{r.path}: {status}")
                click.echo(f"  {r.error}")
                continue
            click.echo(f"{r.path}: {status} ({len(r.errors)} errors, {len(r.warnings)} warnings)")
            for message in r.errors:
                click.echo(f"  error: {message}")
            for message in r.warnings:
                click.echo(f"  warning: {message}")

        passed = sum(1 for r in results if r.success)
        click.echo(f"\n{passed} of {len(results)} workflows ready.")

        if not all_passed:
            raise click.exceptions.Exit(1)

    except click.exceptions.Exit:
        raise
    except Exception as e:
        if _get_json_mode(ctx):
            _json_emit(
                ValidateOutput(
                    exit_code=1,
                    all_passed=False,
                    error=str(e),
                )
            )
            raise click.exceptions.Exit(1)
        raise click.ClickException(str(e)) from e
