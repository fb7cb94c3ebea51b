"""Pipeline orchestrator that turns queued articles into one podcast episode."""

import threading
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

import httpx
import pendulum
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..audio import AudioAssembler, AudioComposer, PydubComposer
from ..config import Config, Credentials
from ..errors import AudioProcessingError, ConfigurationError, GrovecastError
from ..generation import AnthropicProvider, PromptTemplateCache, ScriptWriter
from ..models import Article, PodcastEpisode
from ..speech import CallScheduler, MinIntervalScheduler, SpeechifyProvider, SpeechSynthesizer
from ..workspace import RunWorkspace
from .storage import build_episode_filename, persist_episode_audio

console = Console()

STATUS_SCRIPT = "Generating Script"
STATUS_AUDIO = "Generating Podcast"


class PipelineState(str, Enum):
    """Coarse state of a run."""

    IDLE = "idle"
    SCRIPT_GENERATION = "script_generation"
    AUDIO_SYNTHESIS = "audio_synthesis"
    ASSEMBLY = "assembly"
    FINALIZE = "finalize"
    DONE = "done"
    FAILED = "failed"


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


class PipelineOrchestrator:
    """Orchestrates script writing, speech synthesis and audio assembly."""

    def __init__(
        self,
        config: Config,
        credentials: Optional[Credentials] = None,
        composer: Optional[AudioComposer] = None,
        client: Optional[httpx.Client] = None,
        prompt_cache: Optional[PromptTemplateCache] = None,
        scheduler_factory: Optional[Callable[[], CallScheduler]] = None,
        status_callback: Optional[Callable[[str], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize pipeline orchestrator.

        Args:
            config: Configuration manager
            credentials: Fixed API keys; read from config at each run when omitted
            composer: Audio backend (pydub by default)
            client: HTTP client shared by all remote calls
            prompt_cache: Prompt template cache, kept across runs
            scheduler_factory: Builds the TTS call spacing policy for a run
            status_callback: Receives coarse progress messages
            cancel_event: Set to stop the run before the next TTS call
        """
        self.config = config
        self.credentials = credentials
        self.composer = composer or PydubComposer()
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=config.config.llm.timeout)
        self.prompt_cache = prompt_cache or PromptTemplateCache(
            url=config.config.llm.prompt_url,
            client=self.client,
            ttl=config.config.llm.prompt_cache_ttl,
        )
        self.scheduler_factory = scheduler_factory or (
            lambda: MinIntervalScheduler(config.config.tts.min_call_interval)
        )
        self.status_callback = status_callback
        self.cancel_event = cancel_event
        self.state = PipelineState.IDLE
        self.stages: List[PipelineStage] = []
        self.total_start_time: Optional[float] = None

    def close(self) -> None:
        """Close the HTTP client if this orchestrator created it."""
        if self._owns_client:
            self.client.close()

    def _new_stages(self) -> List[PipelineStage]:
        return [
            PipelineStage("script", "Writing episode script"),
            PipelineStage("audio", "Synthesizing section audio"),
            PipelineStage("assembly", "Assembling episode audio"),
            PipelineStage("finalize", "Saving episode"),
        ]

    def _notify(self, message: str) -> None:
        if self.status_callback is not None:
            self.status_callback(message)

    def _require_credentials(self) -> Credentials:
        """Read both API keys once; fail before any network call."""
        credentials = self.credentials or self.config.get_credentials()
        if credentials.anthropic_api_key is None or not credentials.anthropic_api_key.get_secret_value():
            raise ConfigurationError("Anthropic API key is missing. Please add it to your configuration.")
        if credentials.speechify_api_key is None or not credentials.speechify_api_key.get_secret_value():
            raise ConfigurationError("Speechify API key is missing. Please add it to your configuration.")
        return credentials

    def _print_summary(self, episode: Optional[PodcastEpisode], error: Optional[str]):
        """Print pipeline execution summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Pipeline Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            if stage.start_time is None:
                status = "-"
            else:
                status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

            details = ""
            if stage.success and stage.stats:
                if stage.name == "script":
                    details = f"{stage.stats.get('sections', 0)} sections, {stage.stats.get('tokens_used', 0)} tokens"
                elif stage.name == "audio":
                    details = f"{stage.stats.get('tts_calls', 0)} TTS calls"
                elif stage.name == "assembly":
                    details = f"{stage.stats.get('included', 0)} segments, {stage.stats.get('skipped', 0)} skipped"
                elif stage.name == "finalize":
                    details = stage.stats.get("filename", "")
            elif stage.error:
                details = stage.error

            table.add_row(stage.name.title(), status, duration, details)

        console.print("\n")
        console.print(table)

        if episode is not None:
            console.print(Panel(
                f"[green]✅ Episode generated![/green]\n\n"
                f"Title: {episode.title}\n"
                f"File: {episode.filename}\n"
                f"Length: {episode.duration_label}\n"
                f"Took: {total_duration:.1f} seconds",
                style="green"
            ))
        else:
            console.print(Panel(
                f"[red]❌ Episode generation failed![/red]\n\n"
                f"{error}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="red"
            ))

    def run(self, articles: Sequence[Article], run_date: Optional[str] = None) -> PodcastEpisode:
        """
        Run the complete pipeline.

        Args:
            articles: Queued articles, in order
            run_date: Date used in the episode file name (default: today)

        Returns:
            Metadata of the saved episode

        Raises:
            ConfigurationError: An API key is missing (no request is made)
            GrovecastError: Any later step failed; temp files are removed
        """
        self.state = PipelineState.IDLE
        self.stages = self._new_stages()
        self.total_start_time = time.time()

        try:
            credentials = self._require_credentials()
        except ConfigurationError:
            self.state = PipelineState.FAILED
            raise

        if run_date is None:
            run_date = pendulum.now().format("YYYY-MM-DD")

        workspace = RunWorkspace(self.config.temp_root)
        episode: Optional[PodcastEpisode] = None
        error: Optional[str] = None

        try:
            episode = self._execute_pipeline(articles, run_date, credentials, workspace)
            self.state = PipelineState.DONE
            return episode
        except GrovecastError as e:
            self.state = PipelineState.FAILED
            error = str(e)
            raise
        except Exception as e:
            self.state = PipelineState.FAILED
            error = str(e)
            raise GrovecastError(f"Podcast generation failed: {e}") from e
        finally:
            workspace.cleanup()
            self._print_summary(episode, error)

    def _execute_pipeline(
        self,
        articles: Sequence[Article],
        run_date: str,
        credentials: Credentials,
        workspace: RunWorkspace,
    ) -> PodcastEpisode:
        """Execute the pipeline stages."""
        settings = self.config.config
        stage = None

        writer = ScriptWriter(
            AnthropicProvider(credentials.anthropic_api_key.get_secret_value(), settings.llm, self.client),
            self.prompt_cache,
        )
        synthesizer = SpeechSynthesizer(
            SpeechifyProvider(credentials.speechify_api_key.get_secret_value(), settings.tts, self.client),
            workspace,
            scheduler=self.scheduler_factory(),
            max_chunk_chars=settings.tts.max_chunk_chars,
            cancel_event=self.cancel_event,
        )
        assembler = AudioAssembler(self.composer, workspace, settings.audio.export_format)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            try:
                # Stage 1: Script
                stage = self.stages[0]
                task = progress.add_task(stage.description, total=1)
                stage.start()
                self.state = PipelineState.SCRIPT_GENERATION
                self._notify(STATUS_SCRIPT)

                script = writer.generate(articles)
                sections = script.sections()

                stage.complete({
                    "sections": len(sections),
                    "tokens_used": writer.last_stats.tokens_used if writer.last_stats else 0,
                })
                progress.advance(task, 1)

                # Stage 2: Per-section audio
                stage = self.stages[1]
                progress.remove_task(task)
                task = progress.add_task(stage.description, total=len(sections))
                stage.start()
                self.state = PipelineState.AUDIO_SYNTHESIS
                self._notify(STATUS_AUDIO)

                section_files: List[Path] = []
                for section in sections:
                    chunk_files = synthesizer.synthesize_section(section)
                    if len(chunk_files) > 1:
                        report = assembler.combine(chunk_files, f"{section.key}_{section.index}_combined")
                        workspace.discard(chunk_files)
                        section_files.append(report.output_path)
                    else:
                        section_files.extend(chunk_files)
                    progress.advance(task, 1)

                stage.complete({"tts_calls": synthesizer.calls_made})

                # Stage 3: Whole-episode assembly
                stage = self.stages[2]
                progress.remove_task(task)
                task = progress.add_task(stage.description, total=1)
                stage.start()
                self.state = PipelineState.ASSEMBLY

                report = assembler.combine(section_files, "episode")
                workspace.discard(section_files)

                stage.complete({"included": len(report.included), "skipped": len(report.skipped)})
                progress.advance(task, 1)

                # Stage 4: Move into the episodes folder and probe
                stage = self.stages[3]
                progress.remove_task(task)
                task = progress.add_task(stage.description, total=1)
                stage.start()
                self.state = PipelineState.FINALIZE

                filename = build_episode_filename(script.episode_title, run_date, settings.audio.export_format)
                final_path = persist_episode_audio(report.output_path, self.config.episodes_dir, filename)
                workspace.release(report.output_path)

                try:
                    duration = self.composer.probe_duration(final_path)
                except Exception as e:
                    final_path.unlink(missing_ok=True)
                    raise AudioProcessingError(f"Could not read episode duration: {e}") from e

                episode = PodcastEpisode(
                    title=script.episode_title,
                    filename=final_path.name,
                    duration=duration,
                )

                stage.complete({"filename": episode.filename})
                progress.advance(task, 1)

                return episode

            except Exception as e:
                if stage is not None:
                    stage.fail(str(e))
                raise
