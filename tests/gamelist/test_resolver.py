import logging
import os

import pytest

from gamesync.errors import PathResolutionError
from gamesync.gamelist.resolver import TreeResolver
from gamesync.tree.file_node import FileTree, FileType


@pytest.fixture
def tree(system_dir):
    return FileTree(system_dir)


@pytest.fixture
def resolver(tree):
    return TreeResolver(tree)


@pytest.mark.unit
def test_creates_game_and_missing_intermediate_folders(tree, resolver, system_dir, make_rom):
    rom = make_rom("foo/bar.nes")

    node = resolver.resolve_or_create(rom, FileType.GAME)

    assert node is not None
    assert node.kind == FileType.GAME
    assert node.path == rom

    folders = tree.children(tree.root)
    assert len(folders) == 1
    assert folders[0].kind == FileType.FOLDER
    assert folders[0].path == system_dir / "foo"
    assert tree.children(folders[0]) == [node]


@pytest.mark.unit
def test_new_game_gets_default_name(resolver, make_rom):
    rom = make_rom("Super Mario Bros. (USA).nes")

    node = resolver.resolve_or_create(rom, FileType.GAME)

    assert node.metadata.get("name") == "Super Mario Bros."


@pytest.mark.unit
def test_resolution_is_idempotent(tree, resolver, make_rom):
    rom = make_rom("foo/bar.nes")

    first = resolver.resolve_or_create(rom, FileType.GAME)
    size = len(tree)
    second = resolver.resolve_or_create(rom, FileType.GAME)

    assert second is first
    assert len(tree) == size


@pytest.mark.unit
def test_symlinked_game_resolves_to_a_single_node(tree, resolver, system_dir, make_rom):
    real = make_rom("real.nes")
    link = system_dir / "link.nes"
    os.symlink(real, link)

    first = resolver.resolve_or_create(link, FileType.GAME)
    second = resolver.resolve_or_create(link, FileType.GAME)

    assert second is first
    assert first.name == "real.nes"
    assert resolver.resolve_or_create(real, FileType.GAME) is first
    assert tree.children(tree.root) == [first]


@pytest.mark.unit
def test_game_below_symlinked_folder_is_named_by_its_target(tree, resolver, system_dir, make_rom):
    make_rom("real/a.nes")
    os.symlink(system_dir / "real", system_dir / "link")

    first = resolver.resolve_or_create(system_dir / "link" / "a.nes", FileType.GAME)
    second = resolver.resolve_or_create(system_dir / "link" / "a.nes", FileType.GAME)

    assert second is first
    folder = tree.parent(first)
    assert folder.name == "real"
    assert first.path == folder.path / "a.nes"
    assert tree.children(folder) == [first]


@pytest.mark.unit
def test_sibling_games_share_created_folder(tree, resolver, make_rom):
    one = resolver.resolve_or_create(make_rom("foo/one.nes"), FileType.GAME)
    two = resolver.resolve_or_create(make_rom("foo/two.nes"), FileType.GAME)

    folders = tree.children(tree.root)
    assert len(folders) == 1
    assert tree.children(folders[0]) == [one, two]


@pytest.mark.unit
def test_missing_folder_chain_is_not_created(tree, resolver, system_dir):
    target = system_dir / "a" / "b" / "c"
    target.mkdir(parents=True)

    assert resolver.resolve_or_create(target, FileType.FOLDER) is None
    assert len(tree) == 1


@pytest.mark.unit
def test_missing_last_folder_is_not_created(tree, resolver, system_dir):
    a = tree.add_child(tree.root, system_dir / "a", FileType.FOLDER)
    (system_dir / "a" / "b").mkdir(parents=True)

    assert resolver.resolve_or_create(system_dir / "a" / "b", FileType.FOLDER) is None
    assert tree.children(a) == []


@pytest.mark.unit
def test_existing_folder_is_returned(tree, resolver, system_dir):
    (system_dir / "a" / "b").mkdir(parents=True)
    a = tree.add_child(tree.root, system_dir / "a", FileType.FOLDER)
    b = tree.add_child(a, system_dir / "a" / "b", FileType.FOLDER)

    assert resolver.resolve_or_create(system_dir / "a" / "b", FileType.FOLDER) is b


@pytest.mark.unit
def test_existing_node_kind_is_trusted(tree, resolver, system_dir):
    (system_dir / "Disc Game.cue").mkdir()
    folder = tree.add_child(tree.root, system_dir / "Disc Game.cue", FileType.FOLDER)

    node = resolver.resolve_or_create(system_dir / "Disc Game.cue", FileType.GAME)

    assert node is folder
    assert node.kind == FileType.FOLDER


@pytest.mark.unit
def test_first_matching_child_wins(tree, resolver, make_rom):
    rom = make_rom("dup.nes")
    first = tree.add_child(tree.root, rom, FileType.GAME)
    tree.add_child(tree.root, rom, FileType.GAME)

    assert resolver.resolve_or_create(rom, FileType.GAME) is first


@pytest.mark.unit
def test_path_outside_root_is_rejected(tmp_path, tree, resolver, caplog):
    outside = tmp_path / "other" / "place" / "game.nes"
    outside.parent.mkdir(parents=True)
    outside.write_text("rom")

    with caplog.at_level(logging.ERROR):
        node = resolver.resolve_or_create(outside, FileType.GAME)

    assert node is None
    assert len(tree) == 1
    assert "outside system path" in caplog.text


@pytest.mark.unit
def test_root_path_resolves_to_root_for_folders_only(tree, resolver, system_dir):
    assert resolver.resolve_or_create(system_dir, FileType.FOLDER) is tree.root
    assert resolver.resolve_or_create(system_dir, FileType.GAME) is None


@pytest.mark.unit
def test_missing_file_propagates_resolution_error(resolver, system_dir):
    with pytest.raises(PathResolutionError):
        resolver.resolve_or_create(system_dir / "missing.nes", FileType.GAME)


@pytest.mark.unit
def test_uses_injected_logger(tmp_path, tree, system_dir, caplog):
    custom = logging.getLogger("gamesync.tests.resolver")
    resolver = TreeResolver(tree, log=custom)
    (system_dir / "a").mkdir()

    with caplog.at_level(logging.WARNING, logger="gamesync.tests.resolver"):
        resolver.resolve_or_create(system_dir / "a", FileType.FOLDER)

    assert any(r.name == "gamesync.tests.resolver" for r in caplog.records)
    assert "won't create" in caplog.text
