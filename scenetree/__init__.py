"""Scene tree data model."""

from .model import ROOT_KEY, SceneNode, SceneResult, Tree, TreeNode

__all__ = [
    "ROOT_KEY",
    "SceneNode",
    "SceneResult",
    "Tree",
    "TreeNode",
]
