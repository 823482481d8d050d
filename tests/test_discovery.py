# Tests for video discovery
"""
Test suite for metacap.discovery.
"""

import os

from metacap.discovery import discover, walk
from metacap.identity import Special, Standard


def _touch(root, *names: str) -> None:
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b'')


class TestWalk:
    def test_recurses_and_excludes(self, tmp_path):
        _touch(tmp_path, 'a.mp4', 'sub/b.mkv', 'output/c.mp4', 'skip.me')
        found = [os.path.relpath(p, tmp_path) for p in walk(str(tmp_path), ['output', 'skip.me'])]
        assert found == ['a.mp4', os.path.join('sub', 'b.mkv')]


class TestDiscover:
    def test_groups_by_identity(self, tmp_path):
        _touch(tmp_path, 'STARS-804.mp4', 'FC2-PPV-3234.mkv', 'ABP-001-C.mp4')
        videos = discover(str(tmp_path), ['mp4', 'mkv'])
        assert set(videos) == {Standard('STARS', '804'), Special('3234'), Standard('ABP', '001')}

    def test_extension_filter(self, tmp_path):
        _touch(tmp_path, 'STARS-804.mp4', 'STARS-805.txt', 'STARS-806.MP4')
        videos = discover(str(tmp_path), ['.mp4'])
        assert set(videos) == {Standard('STARS', '804'), Standard('STARS', '806')}
        assert videos[Standard('STARS', '806')].files[0].ext == 'MP4'

    def test_multipart(self, tmp_path):
        _touch(tmp_path, 'STARS-804-2.mp4', 'STARS-804-1.mp4')
        videos = discover(str(tmp_path), ['mp4'])
        video = videos[Standard('STARS', '804')]
        assert video.multipart
        assert [f.part for f in video.files] == [1, 2]
        assert video.identity.part == 0

    def test_single_file_is_not_multipart(self, tmp_path):
        _touch(tmp_path, 'STARS-804.mp4')
        assert not discover(str(tmp_path), ['mp4'])[Standard('STARS', '804')].multipart

    def test_unrecognised_names_are_skipped(self, tmp_path, capsys):
        _touch(tmp_path, 'holiday.mp4', 'STARS-804.mp4')
        videos = discover(str(tmp_path), ['mp4'])
        assert list(videos) == [Standard('STARS', '804')]
        assert 'holiday.mp4' in capsys.readouterr().out

    def test_excludes(self, tmp_path):
        _touch(tmp_path, 'done/STARS-804.mp4', 'STARS-805.mp4')
        videos = discover(str(tmp_path), ['mp4'], excludes=['done'])
        assert list(videos) == [Standard('STARS', '805')]

    def test_empty_directory(self, tmp_path):
        assert discover(str(tmp_path), ['mp4']) == {}
