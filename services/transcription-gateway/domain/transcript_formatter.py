"""Renders completed transcription jobs as downloadable text formats."""

from .models import TranscriptFormat, TranscriptionJob, TranscriptWord

PARAGRAPH_THRESHOLD_MS = 2000

_MEDIA_TYPES = {
    TranscriptFormat.txt: "text/plain",
    TranscriptFormat.paragraphs: "text/plain",
    TranscriptFormat.srt: "application/x-subrip",
    TranscriptFormat.json: "application/json",
}

_EXTENSIONS = {
    TranscriptFormat.txt: "txt",
    TranscriptFormat.paragraphs: "txt",
    TranscriptFormat.srt: "srt",
    TranscriptFormat.json: "json",
}


def format_srt_time(ms: int) -> str:
    """Formats milliseconds as ``HH:MM:SS,mmm``."""
    total_seconds, milliseconds = divmod(int(ms), 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def format_clock(ms: int) -> str:
    """Formats milliseconds as ``mm:ss``; minutes keep counting past 59."""
    minutes, seconds = divmod(int(ms) // 1000, 60)
    return f"{minutes:02d}:{seconds:02d}"


def to_plain_text(job: TranscriptionJob) -> str:
    return job.text or ""


def to_timestamped_paragraphs(
    job: TranscriptionJob, threshold_ms: int = PARAGRAPH_THRESHOLD_MS
) -> str:
    """
    Groups words into ``[mm:ss - mm:ss] text`` lines.

    Words accumulate into a line until the time elapsed since the line's
    first word reaches ``threshold_ms``; the last word always flushes.
    """
    lines: list[str] = []
    current: list[TranscriptWord] = []
    words = job.words

    for index, word in enumerate(words):
        current.append(word)
        is_last = index == len(words) - 1
        if word.end - current[0].start >= threshold_ms or is_last:
            text = " ".join(w.text for w in current)
            lines.append(
                f"[{format_clock(current[0].start)} - {format_clock(word.end)}] {text}"
            )
            current = []

    return "\n".join(lines)


def to_srt(job: TranscriptionJob) -> str:
    """One numbered subtitle block per word, separated by blank lines."""
    return "".join(
        f"{i}\n{format_srt_time(w.start)} --> {format_srt_time(w.end)}\n{w.text}\n\n"
        for i, w in enumerate(job.words, start=1)
    )


def to_json(job: TranscriptionJob) -> str:
    return job.model_dump_json(indent=2)


def render(job: TranscriptionJob, fmt: TranscriptFormat) -> str:
    """Renders ``job`` in the requested format."""
    if fmt == TranscriptFormat.txt:
        return to_plain_text(job)
    if fmt == TranscriptFormat.paragraphs:
        return to_timestamped_paragraphs(job)
    if fmt == TranscriptFormat.srt:
        return to_srt(job)
    return to_json(job)


def media_type_for(fmt: TranscriptFormat) -> str:
    return _MEDIA_TYPES[fmt]


def filename_for(fmt: TranscriptFormat) -> str:
    return f"transcript.{_EXTENSIONS[fmt]}"
