"""
imageatlas CLI - Command-line interface for building texture atlases
"""

import click
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from imageatlas import __version__
from imageatlas.atlas import AtlasBuilder
from imageatlas.exceptions import AtlasError
from imageatlas.export import write_atlas
from imageatlas.manifest import load_image, load_manifest
from imageatlas.schema import (
    AtlasDescriptor,
    AtlasEntry,
    Mip,
    MipFilter,
    MipWithBlock,
    MipWithPadding,
    NoMip,
    NoMipWithPadding,
    WrapPolicy,
)
from imageatlas.texturing.packer import get_packer


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    imageatlas - Pack images into mip-mapped texture atlas pages.

    Examples:
        imageatlas build atlas.json -o out/
        imageatlas pack grass.png stone.png -o out/ --size 512 --filter box --block 32
    """
    pass


def _mip_option(mip_filter, block, padding):
    if mip_filter is None and block is None:
        return NoMipWithPadding(padding=padding) if padding else NoMip()
    mip_filter = MipFilter(mip_filter or MipFilter.lanczos3)
    if block is not None:
        return MipWithBlock(filter=mip_filter, block_size=block)
    if padding is not None:
        return MipWithPadding(filter=mip_filter, padding=padding)
    return Mip(filter=mip_filter)


def _build_and_write(descriptor, output, name, embed, packer, workers, verbose):
    builder = AtlasBuilder(packer=get_packer(packer), max_workers=workers)
    atlas = builder.build(descriptor)
    written = write_atlas(atlas, output, name=name, embed=embed)

    if verbose:
        click.echo(f"  Pages: {atlas.page_count} x {atlas.size}px, {atlas.mip_level_count} mip level(s)")
        click.echo(f"  Padding: {atlas.padding}px")
        click.echo(f"  Files: {len(written)}")
    click.secho(f"✓ Success! Atlas written to {output}", fg='green')


def _run(fn, verbose):
    try:
        fn()
    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except AtlasError as e:
        click.secho(f"Atlas Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"Manifest Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Unexpected error: {e}", fg='red', err=True)
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


@cli.command()
@click.argument('manifest')
@click.option('-o', '--output', required=True, help='Output directory for page PNGs and the JSON table')
@click.option('--name', default='atlas', help='Base name of written files')
@click.option('--embed', is_flag=True, help='Embed level-0 pages as base64 PNG in the JSON table')
@click.option('--packer', type=click.Choice(['rectpack', 'shelf']), default='rectpack', help='Packing algorithm')
@click.option('--workers', type=int, default=None, help='Worker threads (default: IMAGEATLAS_MAX_WORKERS or 1)')
@click.option('--verbose', '-v', is_flag=True, help='Show atlas statistics and log progress')
def build(manifest, output, name, embed, packer, workers, verbose):
    """
    Build an atlas from a JSON manifest.

    Examples:
        imageatlas build atlas.json -o out/
        imageatlas build atlas.json -o out/ --name terrain --embed
    """
    if verbose:
        logging.basicConfig(level=logging.INFO)

    def run():
        click.echo(f"Building: {manifest}")
        descriptor = load_manifest(manifest)
        _build_and_write(descriptor, output, name, embed, packer, workers, verbose)

    _run(run, verbose)


@cli.command()
@click.argument('images', nargs=-1, required=True)
@click.option('-o', '--output', required=True, help='Output directory for page PNGs and the JSON table')
@click.option('--size', type=int, required=True, help='Page side length in pixels')
@click.option('--pages', type=int, default=1, help='Maximum number of pages')
@click.option('--filter', 'mip_filter', type=click.Choice([f.value for f in MipFilter]), default=None,
              help='Mip filter (enables mip generation). A full chain down to 1x1 needs '
                   '--padding; otherwise its border covers the whole page')
@click.option('--block', type=int, default=None,
              help='Stop the mip chain at this side length (padding is derived from it)')
@click.option('--padding', type=int, default=None,
              help='Explicit padding in pixels (not combinable with --block)')
@click.option('--wrap', type=click.Choice([w.value for w in WrapPolicy]), default='clamp',
              help='Padding fill policy for every image')
@click.option('--mode', default='RGBA', help='Page pixel mode (L, LA, RGB, RGBA)')
@click.option('--name', default='atlas', help='Base name of written files')
@click.option('--packer', type=click.Choice(['rectpack', 'shelf']), default='rectpack', help='Packing algorithm')
@click.option('--verbose', '-v', is_flag=True, help='Show atlas statistics and log progress')
def pack(images, output, size, pages, mip_filter, block, padding, wrap, mode, name, packer, verbose):
    """
    Pack image files into an atlas; keys are file stems.

    Examples:
        imageatlas pack a.png b.png -o out/ --size 256
        imageatlas pack tiles/*.png -o out/ --size 1024 --pages 4 --filter lanczos3 --block 32 --wrap repeat
    """
    if block is not None and padding is not None:
        raise click.UsageError("--block derives its own padding; use either --block or --padding")

    if verbose:
        logging.basicConfig(level=logging.INFO)

    def run():
        entries = [
            AtlasEntry(image=load_image(path), wrap=WrapPolicy(wrap), key=Path(path).stem)
            for path in images
        ]
        descriptor = AtlasDescriptor(
            max_page_count=pages,
            size=size,
            mip=_mip_option(mip_filter, block, padding),
            entries=entries,
            mode=mode,
        )
        click.echo(f"Packing {len(entries)} image(s) into {size}x{size} page(s)")
        _build_and_write(descriptor, output, name, False, packer, None, verbose)

    _run(run, verbose)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
