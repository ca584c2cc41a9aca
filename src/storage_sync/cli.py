"""Command-line interface for the storage sync application."""

import signal
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console

from .backends import LocalBackend, ObjectStoreBackend, StorageBackend
from .config.settings import BackendType, SyncJobConfig, SyncMode
from .sync.engine import SyncEngine, init_backend_with_engine
from .utils.logging import setup_logging

console = Console()

@click.group()
@click.version_option(version="1.0.0")
def cli():
    """Storage Sync

    Mirror a directory tree into a local directory or an S3-compatible bucket,
    as a full copy (distcp) or an incremental sync on an interval.
    """
    pass

def _job_options(func):
    """Options shared by the commands that act on a sync job."""
    options = [
        click.option('--config', '-c',
                     type=click.Path(exists=True, path_type=Path),
                     help='YAML job file; command-line options override its values'),
        click.option('--backend', '-b',
                     type=click.Choice([b.value for b in BackendType]),
                     help='Backend type: fs or minio (default: fs)'),
        click.option('--src', 'source', help='Source directory (required)'),
        click.option('--trg', 'target', help='Target directory (fs) or key prefix (minio)'),
        click.option('--bucket', help='Bucket name (minio backend)'),
        click.option('--log-level',
                     type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
                     default='INFO',
                     help='Logging level'),
        click.option('--log-file',
                     type=click.Path(path_type=Path),
                     help='Also write logs to this file'),
    ]
    for option in reversed(options):
        func = option(func)
    return func

def load_job(config: Optional[Path], overrides: Dict[str, Any]) -> SyncJobConfig:
    """Build a job from an optional YAML file plus command-line overrides."""
    if config:
        return SyncJobConfig.from_yaml(config, **overrides)
    return SyncJobConfig(**{key: value for key, value in overrides.items() if value is not None})

def build_backend(job: SyncJobConfig) -> StorageBackend:
    """Create the backend selected by the job."""
    backend_config = job.to_backend_config()
    if job.backend == BackendType.MINIO:
        return ObjectStoreBackend(backend_config)
    return LocalBackend(backend_config)

def _prepare(config, backend, source, target, bucket, log_level, log_file,
             **extra) -> Tuple[SyncJobConfig, SyncEngine]:
    setup_logging(log_level=log_level, log_file=log_file)

    try:
        job = load_job(config, dict(backend=backend, source=source, target=target,
                                    bucket=bucket, **extra))
    except ValidationError as e:
        for error in e.errors():
            console.print(f"❌ {error['msg']}", style="red")
        sys.exit(1)
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red bold")
        sys.exit(1)

    try:
        engine = init_backend_with_engine(build_backend(job))
    except Exception as e:
        console.print(f"❌ Failed to initialize backend: {e}", style="red bold")
        sys.exit(1)

    return job, engine

@cli.command()
@_job_options
@click.option('--mode', '-m',
              type=click.Choice([m.value for m in SyncMode]),
              help='Mode: sync or distcp (default: sync)')
@click.option('--interval', '-i',
              type=int,
              help='Continuous sync interval in seconds (0 for one-shot)')
def run(config, backend, source, target, bucket, log_level, log_file, mode, interval):
    """Copy the source tree to the target."""
    job, engine = _prepare(config, backend, source, target, bucket, log_level, log_file,
                           mode=mode, interval=interval)

    try:
        if job.mode == SyncMode.DISTCP:
            engine.run_once()
        elif job.interval > 0:
            signal.signal(signal.SIGTERM, lambda signum, frame: engine.stop())
            console.print(f"🔄 Syncing every {job.interval}s (Ctrl-C to stop)")
            try:
                engine.run_forever(job.interval)
            except KeyboardInterrupt:
                engine.stop()
                console.print("⏹️ Stopped", style="yellow")
                return
        else:
            engine.sync_once()
    except Exception as e:
        console.print(f"❌ Error: {e}", style="red bold")
        sys.exit(1)

    console.print("✅ Done", style="green")

@cli.command()
@_job_options
def check(config, backend, source, target, bucket, log_level, log_file):
    """Initialize the configured backend without copying anything."""
    _, engine = _prepare(config, backend, source, target, bucket, log_level, log_file)
    console.print(f"✅ {type(engine.backend).__name__} ready", style="green")

@cli.command()
@click.option('--config', '-c',
              type=click.Path(path_type=Path),
              default=Path('config/sync.yaml'),
              help='Path to save the job file')
def init(config: Path):
    """Write a sample job file."""
    if config.exists():
        if not click.confirm(f"Configuration file {config} already exists. Overwrite?"):
            return

    sample = SyncJobConfig(
        backend=BackendType.MINIO,
        mode=SyncMode.SYNC,
        source='/data/export',
        target='backups/export/',
        bucket='my-sync-bucket',
        interval=300,
    )
    sample.to_yaml(config)

    console.print(f"✅ Configuration saved to {config}", style="green")
    console.print("\n📝 Next steps:")
    console.print("1. Edit the job file to match your setup")
    console.print("2. Export MINIO_ENDPOINT, MINIO_ACCESS_KEY, MINIO_SECRET_KEY and MINIO_USE_SSL")
    console.print(f"3. Run 'storage-sync check -c {config}' to verify the target")
    console.print(f"4. Run 'storage-sync run -c {config}' to start syncing")

if __name__ == '__main__':
    cli()
