# astra/services/file_tree.py
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence

from astra.models.workshop import FileNode, ParsedFile, ParsedFolder


def create_file_tree(files: Sequence[ParsedFile], folders: Sequence[ParsedFolder]) -> List[FileNode]:
    tree: List[FileNode] = []
    path_map: Dict[str, FileNode] = {}

    for folder in folders:
        current = ""
        for part in folder.path.split("/"):
            parent = current
            current = f"{current}/{part}" if current else part
            if current in path_map:
                continue

            node = FileNode(name=part, type="folder", path=current, children=[], expanded=False)
            path_map[current] = node
            if parent:
                path_map[parent].children.append(node)
            else:
                tree.append(node)

    for f in files:
        dir_path, _, file_name = f.path.rpartition("/")
        node = FileNode(
            name=file_name,
            type="file",
            path=f.path,
            content=f.content,
            language=f.language,
        )
        if not dir_path:
            tree.append(node)
            continue
        # files whose folder was never declared are dropped
        parent = path_map.get(dir_path)
        if parent is not None:
            parent.children.append(node)

    return tree


def walk(nodes: Sequence[FileNode]) -> Iterator[FileNode]:
    for node in nodes:
        yield node
        if node.children:
            yield from walk(node.children)


def find_node(nodes: Sequence[FileNode], path: str) -> Optional[FileNode]:
    for node in walk(nodes):
        if node.path == path:
            return node
    return None


def iter_files(nodes: Sequence[FileNode]) -> Iterator[FileNode]:
    """Depth-first file nodes that carry content, in tree order."""
    for node in walk(nodes):
        if node.type == "file" and node.content:
            yield node


def first_file(nodes: Sequence[FileNode]) -> Optional[FileNode]:
    for node in nodes:
        if node.type == "file":
            return node
    if nodes and nodes[0].children:
        for child in nodes[0].children:
            if child.type == "file":
                return child
    return None


def toggle_folder(nodes: Sequence[FileNode], path: str) -> Optional[FileNode]:
    node = find_node(nodes, path)
    if node is None or node.type != "folder":
        return None
    node.expanded = not node.expanded
    return node


def add_node(tree: List[FileNode], name: str, type: str, parent_path: Optional[str] = None) -> Optional[FileNode]:
    """
    Create an empty file or folder, at the root or under ``parent_path``.

    Blank names are ignored. Adding under a folder expands it.
    """
    name = name.strip()
    if not name:
        return None

    if parent_path:
        parent = find_node(tree, parent_path)
        if parent is None or parent.type != "folder":
            raise KeyError(parent_path)
        siblings = parent.children
    else:
        parent = None
        siblings = tree

    path = f"{parent_path}/{name}" if parent_path else name
    if any(n.path == path for n in siblings):
        raise ValueError(f"path already exists: {path}")

    if type == "folder":
        node = FileNode(name=name, type="folder", path=path, children=[], expanded=False)
    else:
        node = FileNode(name=name, type="file", path=path)

    siblings.append(node)
    if parent is not None:
        parent.expanded = True
    return node


def update_file_content(nodes: Sequence[FileNode], path: str, content: str) -> FileNode:
    node = find_node(nodes, path)
    if node is None or node.type != "file":
        raise KeyError(path)
    node.content = content
    return node
