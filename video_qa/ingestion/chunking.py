"""Split a video transcript into ordered, optionally timed chunks."""

from __future__ import annotations

from video_qa.ingestion.models import TranscriptChunk, TranscriptSegment, VideoTranscript


def chunk_transcript(
    video: VideoTranscript,
    chunk_size: int = 180,
    overlap: int = 35,
) -> list[TranscriptChunk]:
    """Split a transcript into fixed-size word windows.

    When the transcript has segments they are the source of the words, and
    each chunk takes its start/end time from the first/last contributing
    segment. Otherwise the plain text is split and chunks carry no timing.

    Args:
        video: Parsed transcript.
        chunk_size: Target number of words per chunk.
        overlap: Number of overlapping words between consecutive chunks.

    Returns:
        Chunks with sequential ``order`` and the video's metadata attached.
    """
    segments = video.segments or [TranscriptSegment(text=video.text)]

    # Flat list of (word, segment_index) pairs to track provenance
    word_seg_pairs: list[tuple[str, int]] = []
    for seg_idx, seg in enumerate(segments):
        for word in seg.text.split():
            word_seg_pairs.append((word, seg_idx))

    if not word_seg_pairs:
        return []

    metadata = {"video_id": video.video_id, **video.metadata}
    step = chunk_size - overlap if chunk_size > overlap else chunk_size

    chunks: list[TranscriptChunk] = []
    start = 0
    while start < len(word_seg_pairs):
        end = min(start + chunk_size, len(word_seg_pairs))
        window = word_seg_pairs[start:end]
        first_seg = segments[window[0][1]]
        last_seg = segments[window[-1][1]]

        chunks.append(
            TranscriptChunk(
                text=" ".join(w for w, _ in window),
                order=len(chunks),
                start_sec=first_seg.start_sec,
                end_sec=last_seg.end_sec,
                video_id=video.video_id,
                metadata=metadata,
            )
        )
        if end == len(word_seg_pairs):
            break
        start += step

    return chunks
