"""``pmx`` command line: inspect and re-save PMX files."""

import logging
from pathlib import Path

import click

from .pmx_config import CodecConfig, parse_encoding
from .pmx_errors import PMXError
from .pmx_reader import read_pmx
from .pmx_writer import write_pmx


def _fail(error):
    raise click.ClickException(str(error))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log per-section debug output.")
def main(verbose):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@main.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info_cmd(path: Path):
    """Print the header and per-section counts of a PMX file."""
    try:
        header, model = read_pmx(path)
    except PMXError as e:
        _fail(e)

    click.echo(f"file: {path}")
    click.echo(f"version: {header.version:.1f}")
    click.echo(f"encoding: {header.encoding.name}")
    click.echo(f"additional_vec4: {header.additional_vec4_count}")
    click.echo(
        "index sizes: "
        f"vertex={int(header.vertex_index_size)} "
        f"texture={int(header.texture_index_size)} "
        f"material={int(header.material_index_size)} "
        f"bone={int(header.bone_index_size)} "
        f"morph={int(header.morph_index_size)} "
        f"rigid_body={int(header.rigid_body_index_size)}"
    )
    click.echo(f"name: {model.info.name}")
    if model.info.name_en:
        click.echo(f"name_en: {model.info.name_en}")
    for section, count in model.section_counts().items():
        click.echo(f"{section}: {count}")


@main.command("resave")
@click.argument("src", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("dst", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--version", "version", type=float, default=None,
              help="Target PMX version (2.0 or 2.1). Defaults to PMX_VERSION or 2.0.")
@click.option("--encoding", "encoding", default=None,
              help="Text encoding for the output (utf-16 or utf-8).")
def resave_cmd(src: Path, dst: Path, version, encoding):
    """Decode SRC and re-encode it to DST with a best-fit header."""
    try:
        config = CodecConfig.from_env()
        if encoding is not None:
            config.encoding = parse_encoding(encoding)
        _, model = read_pmx(src)
        header = write_pmx(dst, model, version=version, config=config)
    except PMXError as e:
        _fail(e)
    click.echo(f"wrote {dst} (version {header.version:.1f}, {header.encoding.name})")


if __name__ == "__main__":
    main()
