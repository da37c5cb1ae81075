from tracklang.objects.tracks import Track, Tracks  # noqa: F401
