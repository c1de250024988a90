"""Create (or reuse) the release for a pushed tag.

``ReleaseCreator.run`` performs one attempt and ends in exactly one terminal
outcome:

    Start -> [required input missing]        -> InputRejected
    Start -> lookup by tag
        found (HTTP 200):
            allow_duplicate_tag == "true"    -> Published(existing, reused=True)
                (reply not parseable)        -> CreateFailed(message)
            otherwise                        -> DuplicateTagRejected
        not found / error / non-200:
            create succeeds                  -> Published(created, reused=False)
            create fails                     -> CreateFailed(message)
    Published, outputs not writable          -> OutputFailed(message)

Outputs (``id``, ``html_url``, ``upload_url``, in that order) are handed to
the sink as one batch and are published only for ``Published``; every other
outcome reports one failure message and publishes nothing.

Inputs are read in a fixed order and ``allow_duplicate_tag`` is only read once
an existing release has been found. Callers that script the input source
positionally rely on this.
"""

from __future__ import annotations

from dataclasses import dataclass

from cr.core.inputs import InputError, InputSource, parse_bool_input
from cr.core.result import Err
from cr.github.model import (
    Release,
    ReleaseLookup,
    ReleaseRequest,
    RepoRef,
    tag_name_from_ref,
)
from cr.github.releases import ReleaseClient
from cr.output.console import ConsoleProtocol, Style
from cr.output.workflow import FailureReporter, OutputSink

__all__ = [
    "DUPLICATE_TAG_MESSAGE",
    "CreateFailed",
    "CreateOutcome",
    "DuplicateTagRejected",
    "InputRejected",
    "OutputFailed",
    "Published",
    "ReleaseCreator",
    "UNPARSEABLE_EXISTING_MESSAGE",
]

DUPLICATE_TAG_MESSAGE = "Duplicate tag"
UNPARSEABLE_EXISTING_MESSAGE = "Existing release payload is missing id, html_url or upload_url"


@dataclass(frozen=True, slots=True)
class Published:
    release: Release
    reused: bool


@dataclass(frozen=True, slots=True)
class DuplicateTagRejected:
    tag_name: str


@dataclass(frozen=True, slots=True)
class CreateFailed:
    message: str


@dataclass(frozen=True, slots=True)
class InputRejected:
    message: str


@dataclass(frozen=True, slots=True)
class OutputFailed:
    release: Release
    message: str


type CreateOutcome = (
    Published | DuplicateTagRejected | CreateFailed | InputRejected | OutputFailed
)


@dataclass(frozen=True, slots=True)
class _StepInputs:
    tag_name: str
    name: str
    body: str
    draft: bool
    prerelease: bool


class ReleaseCreator:
    def __init__(
        self,
        *,
        repo: RepoRef,
        inputs: InputSource,
        client: ReleaseClient,
        outputs: OutputSink,
        failures: FailureReporter,
        console: ConsoleProtocol,
    ) -> None:
        self._repo = repo
        self._inputs = inputs
        self._client = client
        self._outputs = outputs
        self._failures = failures
        self._console = console

    def run(self) -> CreateOutcome:
        try:
            step = self._read_inputs()
        except InputError as e:
            self._failures.set_failed(str(e))
            return InputRejected(message=str(e))

        lookup = self._find_existing(step.tag_name)
        if lookup is not None:
            return self._handle_duplicate(step.tag_name, lookup.release)

        request = ReleaseRequest(
            owner=self._repo.owner,
            repo=self._repo.repo,
            tag_name=step.tag_name,
            name=step.name,
            body=step.body,
            draft=step.draft,
            prerelease=step.prerelease,
        )
        return self._create(request)

    def _read_inputs(self) -> _StepInputs:
        # Order matters, see module docstring.
        tag_ref = self._inputs.get_input("tag_name", required=True)
        name = self._inputs.get_input("release_name", required=True)
        body = self._inputs.get_input("body")
        draft = parse_bool_input(self._inputs.get_input("draft"))
        prerelease = parse_bool_input(self._inputs.get_input("prerelease"))
        return _StepInputs(
            tag_name=tag_name_from_ref(tag_ref),
            name=name,
            body=body,
            draft=draft,
            prerelease=prerelease,
        )

    def _find_existing(self, tag_name: str) -> ReleaseLookup | None:
        """Return the lookup reply when a release already exists for the tag.

        Any failure here means "no existing release": the lookup never fails
        the step by itself.
        """
        self._console.print(
            f"looking up release for tag {tag_name} in {self._repo.slug}", Style.DIM
        )
        try:
            result = self._client.get_release_by_tag(self._repo.owner, self._repo.repo, tag_name)
        except Exception as e:
            self._console.info(f"no existing release for {tag_name} ({e})")
            return None

        if isinstance(result, Err):
            self._console.info(f"no existing release for {tag_name} ({result.error.message})")
            return None

        lookup = result.value
        if not lookup.found:
            self._console.info(f"no existing release for {tag_name} (HTTP {lookup.status})")
            return None
        return lookup

    def _handle_duplicate(self, tag_name: str, existing: Release | None) -> CreateOutcome:
        allow_duplicate = parse_bool_input(self._inputs.get_input("allow_duplicate_tag"))
        if not allow_duplicate:
            self._console.error(f"a release already exists for tag {tag_name}")
            self._failures.set_failed(DUPLICATE_TAG_MESSAGE)
            return DuplicateTagRejected(tag_name=tag_name)

        if existing is None:
            self._console.error(f"cannot reuse release for tag {tag_name}")
            self._failures.set_failed(UNPARSEABLE_EXISTING_MESSAGE)
            return CreateFailed(message=UNPARSEABLE_EXISTING_MESSAGE)

        self._console.warning(f"reusing existing release for tag {tag_name}: {existing.html_url}")
        return self._publish(existing, reused=True)

    def _create(self, request: ReleaseRequest) -> CreateOutcome:
        self._console.print(
            f"creating release '{request.name}' for tag {request.tag_name}"
            f" (draft={request.draft}, prerelease={request.prerelease})",
            Style.DIM,
        )
        try:
            result = self._client.create_release(request)
        except Exception as e:
            return self._create_failed(str(e))

        if isinstance(result, Err):
            return self._create_failed(result.error.message)

        created = result.value
        self._console.success(f"created release {created.id}: {created.html_url}")
        return self._publish(created, reused=False)

    def _create_failed(self, message: str) -> CreateFailed:
        self._console.error(f"create release failed: {message}")
        self._failures.set_failed(message)
        return CreateFailed(message=message)

    def _publish(self, release: Release, *, reused: bool) -> Published | OutputFailed:
        try:
            self._outputs.set_outputs(release.outputs())
        except (OSError, ValueError) as e:
            message = f"Failed to write step outputs: {e}"
            self._console.error(message)
            self._failures.set_failed(message)
            return OutputFailed(release=release, message=message)
        return Published(release=release, reused=reused)
