# cli.py - Command line interface for Inkwell
"""
Inkwell CLI - Unified interface for the content pipeline

COMMANDS:
    Manifests:
        inkwell manifest writing               Generate content/writing/manifest.json
        inkwell manifest course NAME           Generate courses/NAME/manifest.json
        inkwell manifest courses               Generate every course manifest
        inkwell index                          Combine manifests into content-index.json

    Checks:
        inkwell validate                       Validate frontmatter, slugs and links
        inkwell audit FILE...                  Check title/description of given course files
        inkwell images                         Check referenced images can be processed

    Other:
        inkwell ast FILE [--escape POLICY]     Print the transformed markdown tree as JSON
        inkwell init                           Write an inkwell.yaml template
        inkwell version                        Show version information

EXAMPLES:
    # Rebuild everything the site needs, in order
    inkwell manifest writing && inkwell manifest courses && inkwell index

    # Gate a pull request
    inkwell validate && inkwell images

Each generator is also installed as a standalone script
(inkwell-writing-manifest, inkwell-course-manifests, inkwell-content-index,
inkwell-validate, inkwell-images) that runs against the current directory.
"""

import json
import sys
from pathlib import Path
from typing import Optional

import click

from inkwell import __version__
from inkwell.config_utils import (
    CONFIG_FILE_NAME,
    EscapePolicy,
    PathsConfig,
    create_config_template,
    get_config,
)
from inkwell.errors import InkwellError
from inkwell.icons import COURSE, ERROR, SUCCESS, WARNING
from inkwell.log_utils import setup_logging


# ============================================================================
# Configuration & Utilities
# ============================================================================

class InkwellContext:
    """Shared context for CLI commands"""

    def __init__(self, root: Optional[Path] = None):
        self.repo_root = Path(root) if root else Path.cwd()
        self._config: Optional[PathsConfig] = None

    @property
    def config(self) -> PathsConfig:
        if self._config is None:
            self._config = get_config(self.repo_root)
        return self._config


def fail(error: InkwellError):
    click.echo(str(error), err=True)
    sys.exit(1)


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
@click.option('--root', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Repository root (default: current directory)')
@click.option('--verbose', '-v', count=True, help='Show debug output')
@click.pass_context
def cli(ctx, root: Optional[Path], verbose: int):
    """
    Inkwell - Content pipeline for writing and courses

    Generates JSON manifests from markdown content and checks that
    frontmatter, links and images are in order.
    """
    setup_logging(verbose)
    ctx.obj = InkwellContext(root)


# ============================================================================
# Manifests
# ============================================================================

@cli.group()
def manifest():
    """Generate collection manifests"""


@manifest.command('writing')
@click.pass_obj
def manifest_writing(ctx: InkwellContext):
    """
    Generate the writing manifest

    Skips the write when no post changed since the last run.
    """
    from inkwell.manifests import generate_writing_manifest

    try:
        generate_writing_manifest(ctx.config)
    except InkwellError as e:
        fail(e)


@manifest.command('course')
@click.argument('name')
@click.pass_obj
def manifest_course(ctx: InkwellContext, name: str):
    """Generate the manifest for one course directory"""
    from inkwell.manifests import generate_course_manifest

    try:
        course_dir = ctx.config.courses_root / name
        if not course_dir.is_dir():
            click.echo(f"{ERROR} Course not found: {course_dir}", err=True)
            sys.exit(1)

        generate_course_manifest(course_dir, ctx.config)
    except InkwellError as e:
        fail(e)


@manifest.command('courses')
@click.pass_obj
def manifest_courses(ctx: InkwellContext):
    """Generate the manifest for every course directory"""
    from inkwell.manifests import generate_all_course_manifests

    try:
        results = generate_all_course_manifests(ctx.config)
    except InkwellError as e:
        fail(e)

    if not results:
        click.echo(f"{WARNING} No course directories under {ctx.config.courses_root}")
        return

    written = sum(1 for r in results if r.written)
    click.echo(f"{COURSE} {len(results)} courses, {written} manifest{'s' if written != 1 else ''} written.")


@cli.command()
@click.pass_obj
def index(ctx: InkwellContext):
    """
    Combine manifests into the site content index

    Requires the writing manifest and at least one course manifest.
    """
    from inkwell.manifests import generate_site_content_index

    try:
        generate_site_content_index(ctx.config)
    except InkwellError as e:
        fail(e)


# ============================================================================
# Checks
# ============================================================================

@cli.command()
@click.pass_obj
def validate(ctx: InkwellContext):
    """
    Validate content before building

    Checks for:
    - Missing or invalid frontmatter fields
    - Duplicate writing or lesson slugs
    - Links to missing posts, courses, lessons or static assets
    - Relative links that leave the content roots or point nowhere

    All problems are listed before exiting with status 1.
    """
    from inkwell.validate import print_results, validate_content

    try:
        result = validate_content(ctx.config)
    except InkwellError as e:
        fail(e)

    print_results(result)
    if not result.is_valid:
        sys.exit(1)


@cli.command()
@click.argument('files', nargs=-1, type=click.Path(path_type=Path))
def audit(files):
    """
    Check title and description frontmatter of specific course files

    Meant for pre-commit hooks that pass the staged files.
    """
    from inkwell.validate import audit_course_frontmatter

    if not files:
        click.echo("No course files provided; skipping frontmatter audit.")
        return

    issues = audit_course_frontmatter(files)
    if issues:
        click.echo(f"{ERROR} Course frontmatter audit failed:", err=True)
        for issue in issues:
            click.echo(str(issue), err=True)
        sys.exit(1)

    click.echo(f"{SUCCESS} Course frontmatter audit passed.")


@cli.command()
@click.pass_obj
def images(ctx: InkwellContext):
    """
    Check that every referenced image can be read and transcoded
    """
    from inkwell.images import check_images, print_results

    try:
        result = check_images(ctx.config)
    except InkwellError as e:
        fail(e)

    print_results(result)
    if not result.is_valid:
        sys.exit(1)


# ============================================================================
# Other
# ============================================================================

@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--escape', 'escape', type=click.Choice(['comparators', 'all', 'none']), default=None,
              help='Escape policy (default: from configuration)')
@click.option('--fix-urls', is_flag=True, help='Rewrite links to markdown files as site routes')
@click.pass_obj
def ast(ctx: InkwellContext, file: Path, escape: Optional[str], fix_urls: bool):
    """Print the markdown tree of FILE after transforms, as JSON"""
    from inkwell.mdast import parse
    from inkwell.metadata import read_document
    from inkwell.transforms import escape_transform, fix_markdown_urls

    try:
        doc = read_document(file)
        tree = parse(doc.content)

        if escape != 'none':
            policy = EscapePolicy(escape) if escape else ctx.config.escape_policy
            escape_transform(policy)(tree)

        if fix_urls:
            fix_markdown_urls()(tree, file.resolve(), ctx.config.repo_root)
    except InkwellError as e:
        fail(e)

    click.echo(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.option('--force', is_flag=True, help=f'Overwrite an existing {CONFIG_FILE_NAME}')
@click.pass_obj
def init(ctx: InkwellContext, force: bool):
    """Write an inkwell.yaml template in the repository root"""
    path = ctx.repo_root / CONFIG_FILE_NAME
    if path.exists() and not force:
        click.echo(f"{WARNING} {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    path.write_text(create_config_template(), encoding="utf-8")
    click.echo(f"{SUCCESS} Wrote {path}")


@cli.command()
def version():
    """Show Inkwell version"""
    click.echo(f"Inkwell CLI v{__version__}")
    click.echo("Content pipeline for writing and courses")


# ============================================================================
# Standalone scripts
# ============================================================================

def _run(*args: str):
    cli.main(args=list(args), prog_name="inkwell")


def writing_manifest_main():
    _run("manifest", "writing")


def course_manifests_main():
    _run("manifest", "courses")


def content_index_main():
    _run("index")


def validate_main():
    _run("validate")


def images_main():
    _run("images")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
