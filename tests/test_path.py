# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreePath, ForestPath, TreeNode and the codec."""

import copy
import json
import pickle

import pytest

from genro_treepath import (
    AT_TRUNK,
    CodecError,
    ForestPath,
    InvalidPathError,
    TreeNode,
    TreePath,
    TreePathError,
    codec,
    leaf,
    tree,
)


class TestTreePathConstruction:
    """Tests for building TreePath values."""

    def test_trunk_is_empty(self):
        """Test the trunk has no steps."""
        assert TreePath.at_trunk() is AT_TRUNK
        assert AT_TRUNK.steps == ()
        assert AT_TRUNK.is_trunk is True
        assert not AT_TRUNK

    def test_follow_equals_composition(self):
        """Test follow builds the same path as repeated to_child."""
        assert TreePath.follow([2, 3, 0]) == AT_TRUNK.to_child(2).to_child(3).to_child(0)

    def test_to_child_appends_last(self):
        """Test to_child appends the new step at the end."""
        assert TreePath([1]).to_child(4).steps == (1, 4)

    def test_negative_index_rejected(self):
        """Test negative indices raise InvalidPathError."""
        with pytest.raises(InvalidPathError, match="non-negative"):
            TreePath([0, -1])
        with pytest.raises(InvalidPathError):
            AT_TRUNK.to_child(-2)

    def test_non_int_index_rejected(self):
        """Test non-int indices raise InvalidPathError."""
        with pytest.raises(InvalidPathError, match="must be an int"):
            TreePath(['a'])
        with pytest.raises(InvalidPathError):
            TreePath([True])

    def test_invalid_path_error_is_value_error(self):
        """Test InvalidPathError can be caught as ValueError."""
        with pytest.raises(ValueError):
            TreePath([-1])
        with pytest.raises(TreePathError):
            TreePath([-1])

    def test_immutable(self):
        """Test paths cannot be modified."""
        path = TreePath([1])
        with pytest.raises(AttributeError, match="immutable"):
            path._steps = (2,)

    def test_join(self):
        """Test join concatenates two paths."""
        assert TreePath([1, 2]).join(TreePath([3])) == TreePath([1, 2, 3])
        assert TreePath([1]).join(AT_TRUNK) == TreePath([1])


class TestTreePathText:
    """Tests for the '#N.#M' text form."""

    def test_str(self):
        """Test str uses positional syntax."""
        assert str(TreePath([2, 0, 1])) == '#2.#0.#1'
        assert str(AT_TRUNK) == ''

    def test_repr(self):
        """Test repr shows the text form."""
        assert repr(TreePath([1, 0])) == "TreePath('#1.#0')"

    def test_parse(self):
        """Test parse is the inverse of str."""
        assert TreePath.parse('#2.#0.#1') == TreePath([2, 0, 1])
        assert TreePath.parse('') is AT_TRUNK
        assert TreePath.parse(str(TreePath([10, 3]))) == TreePath([10, 3])

    @pytest.mark.parametrize('text', ['#-1', 'a.#0', '#0..#1', '#', '0'])
    def test_parse_invalid(self, text):
        """Test malformed text raises InvalidPathError."""
        with pytest.raises(InvalidPathError):
            TreePath.parse(text)

    @pytest.mark.parametrize('text', ['#٣', '#0.#１', '#²'])
    def test_parse_rejects_non_ascii_digits(self, text):
        """Test only ASCII digits are accepted after '#'."""
        with pytest.raises(InvalidPathError):
            TreePath.parse(text)
        with pytest.raises(InvalidPathError):
            ForestPath.parse('#0/' + text)


class TestTreePathDecomposition:
    """Tests for depth, step, to_parent."""

    def test_depth(self):
        """Test depth counts steps."""
        p = TreePath([4, 1])
        assert AT_TRUNK.depth == 0
        assert p.to_child(0).depth == p.depth + 1
        assert len(p) == 2

    def test_step_on_trunk(self):
        """Test step on the trunk signals already at target."""
        assert AT_TRUNK.step() is None

    def test_step_splits_first_index(self):
        """Test step returns the first index and the rest."""
        assert TreePath([2, 3, 0]).step() == (2, TreePath([3, 0]))
        assert TreePath([7]).step() == (7, AT_TRUNK)

    def test_to_parent(self):
        """Test to_parent undoes to_child."""
        p = TreePath([1, 2])
        assert p.to_child(5).to_parent() == p
        assert TreePath([3]).to_parent() == AT_TRUNK
        assert AT_TRUNK.to_parent() is None

    def test_last_index(self):
        """Test last_index returns the final step."""
        assert TreePath([1, 2]).last_index() == 2
        assert AT_TRUNK.last_index() is None

    def test_iteration_and_indexing(self):
        """Test paths behave as read-only sequences of ints."""
        p = TreePath([5, 6])
        assert list(p) == [5, 6]
        assert p[0] == 5
        assert p[-1] == 6


class TestTreePathRelations:
    """Tests for targets_child_of / targets_parent_of."""

    def test_targets_child_of(self):
        """Test strict prefix relation."""
        assert TreePath([2, 3, 0]).targets_child_of(TreePath([2, 3])) is True
        assert TreePath([2]).targets_child_of(TreePath([2, 3])) is False
        assert TreePath([2, 4, 0]).targets_child_of(TreePath([2, 3])) is False

    def test_everything_is_below_trunk(self):
        """Test every non-trunk path targets a child of the trunk."""
        assert TreePath([0]).targets_child_of(AT_TRUNK) is True
        assert AT_TRUNK.targets_child_of(AT_TRUNK) is False

    def test_irreflexive(self):
        """Test a path never targets a child or parent of itself."""
        p = TreePath([1, 1])
        assert p.targets_child_of(p) is False
        assert p.targets_parent_of(p) is False

    def test_targets_parent_of_mirrors(self):
        """Test targets_parent_of is the mirror relation."""
        parent = TreePath([2, 3])
        child = TreePath([2, 3, 0, 1])
        assert parent.targets_parent_of(child) is True
        assert child.targets_parent_of(parent) is False


class TestTreePathEquality:
    """Tests for equality, hashing and ordering."""

    def test_structural_equality(self):
        """Test paths with the same steps are equal."""
        assert TreePath([1, 2]) == TreePath((1, 2))
        assert TreePath([1, 2]) != TreePath([1])
        assert TreePath([1]) != [1]

    def test_usable_as_dict_key(self):
        """Test paths work as dict keys."""
        seen = {TreePath([0, 1]): 'a'}
        assert seen[AT_TRUNK.to_child(0).to_child(1)] == 'a'
        assert len({TreePath([0]), TreePath([0]), AT_TRUNK}) == 2

    def test_ordering(self):
        """Test paths sort parent first, siblings by index."""
        paths = [TreePath([1]), TreePath([0, 5]), AT_TRUNK, TreePath([0])]
        assert sorted(paths) == [AT_TRUNK, TreePath([0]), TreePath([0, 5]), TreePath([1])]
        assert TreePath([0, 9]) < TreePath([1])

    def test_copy_and_deepcopy(self):
        """Test paths survive copy and deepcopy, alone or as dict keys."""
        path = TreePath([1, 0])
        assert copy.copy(path) == path
        assert copy.deepcopy(path) == path
        assert copy.deepcopy({path: 'x', AT_TRUNK: 'root'}) == {path: 'x', AT_TRUNK: 'root'}

    def test_pickle(self):
        """Test paths pickle back to equal, still immutable values."""
        restored = pickle.loads(pickle.dumps(TreePath([2, 0, 1])))
        assert restored == TreePath([2, 0, 1])
        assert hash(restored) == hash(TreePath([2, 0, 1]))
        with pytest.raises(AttributeError):
            restored._steps = ()


class TestForestPath:
    """Tests for ForestPath."""

    def test_from_index_and_projections(self):
        """Test construction and the two projections."""
        fp = ForestPath.from_index(1, TreePath([2]))
        assert fp.tree_index == 1
        assert fp.path_into_tree_at_index == TreePath([2])
        assert fp.inner == TreePath([2])

    def test_default_inner_is_trunk(self):
        """Test a ForestPath without inner path targets the whole tree."""
        assert ForestPath(3).path_into_tree_at_index is AT_TRUNK

    def test_accepts_plain_indices(self):
        """Test inner can be given as a list of ints."""
        assert ForestPath(0, [1, 2]) == ForestPath(0, TreePath([1, 2]))

    def test_to_child_keeps_tree_index(self):
        """Test to_child only extends the inner path."""
        fp = ForestPath(2).to_child(0).to_child(4)
        assert fp.tree_index == 2
        assert fp.path_into_tree_at_index == TreePath([0, 4])
        assert fp.depth == 2

    def test_to_parent(self):
        """Test to_parent stops at the top-level tree."""
        assert ForestPath(1, [0, 2]).to_parent() == ForestPath(1, [0])
        assert ForestPath(1, [0]).to_parent() == ForestPath(1)
        assert ForestPath(1).to_parent() is None

    def test_relations_within_one_tree(self):
        """Test relations compare inner paths of the same tree only."""
        assert ForestPath(1, [0, 1]).targets_child_of(ForestPath(1, [0])) is True
        assert ForestPath(2, [0, 1]).targets_child_of(ForestPath(1, [0])) is False
        assert ForestPath(1).targets_parent_of(ForestPath(1, [3])) is True

    def test_invalid_tree_index(self):
        """Test negative tree index raises InvalidPathError."""
        with pytest.raises(InvalidPathError):
            ForestPath(-1)

    def test_text_form(self):
        """Test str and parse."""
        fp = ForestPath(1, [2, 0])
        assert str(fp) == '#1/#2.#0'
        assert str(ForestPath(4)) == '#4/'
        assert ForestPath.parse('#1/#2.#0') == fp
        assert ForestPath.parse('#4/') == ForestPath(4)

    def test_parse_requires_separator(self):
        """Test parse rejects text without '/'."""
        with pytest.raises(InvalidPathError, match="needs a '/'"):
            ForestPath.parse('#1.#2')

    def test_equality_and_ordering(self):
        """Test structural equality, hashing and ordering."""
        assert ForestPath(1, [2]) == ForestPath(1, [2])
        assert hash(ForestPath(1, [2])) == hash(ForestPath(1, [2]))
        assert ForestPath(0, [9]) < ForestPath(1)
        assert ForestPath(1) < ForestPath(1, [0])

    def test_copy_and_pickle(self):
        """Test forest paths survive copy, deepcopy and pickle."""
        fp = ForestPath(1, [2])
        assert copy.copy(fp) == fp
        assert copy.deepcopy({fp: 'bee'}) == {fp: 'bee'}
        restored = pickle.loads(pickle.dumps(fp))
        assert restored == fp
        assert restored.path_into_tree_at_index == TreePath([2])


class TestTreeNode:
    """Tests for TreeNode."""

    def test_create_leaf(self):
        """Test a leaf has no children."""
        node = leaf('ann')
        assert node.label == 'ann'
        assert node.children == ()
        assert node.is_leaf is True
        assert node.is_branch is False

    def test_children_stored_as_tuple(self):
        """Test children are kept as a tuple, in order."""
        node = TreeNode('mic', [leaf('igg'), leaf('dee')])
        assert isinstance(node.children, tuple)
        assert [c.label for c in node.children] == ['igg', 'dee']
        assert node.is_branch is True

    def test_tree_helper_wraps_labels(self):
        """Test tree() wraps plain labels into leaves."""
        node = tree(0, [1, tree(2, [3])])
        assert node.children[0] == leaf(1)
        assert node.children[1].children == (leaf(3),)

    def test_structural_equality(self):
        """Test nodes compare by label and children."""
        assert tree('a', ['b']) == tree('a', ['b'])
        assert tree('a', ['b']) != tree('a', ['c'])
        assert hash(tree('a', ['b'])) == hash(tree('a', ['b']))

    def test_immutable(self):
        """Test nodes reject attribute assignment."""
        node = leaf('x')
        with pytest.raises(AttributeError, match="immutable"):
            node.label = 'y'

    def test_map_children_shares_when_unchanged(self):
        """Test map_children returns self when fn returns the same children."""
        node = tree('a', ['b'])
        assert node.map_children(lambda cs: cs) is node

    def test_map_children_rebuilds(self):
        """Test map_children keeps the label and replaces children."""
        node = tree('a', ['b', 'c'])
        new = node.map_children(lambda cs: cs[::-1])
        assert new == tree('a', ['c', 'b'])
        assert new.children[0] is node.children[1]

    def test_with_label(self):
        """Test with_label keeps the children by identity."""
        node = tree('a', ['b'])
        new = node.with_label('z')
        assert new.label == 'z'
        assert new.children is node.children

    def test_make_keeps_subclass(self):
        """Test make builds nodes of the caller's class."""
        class Named(TreeNode):
            __slots__ = ()

        node = Named('a')
        assert type(node.make('b', [])) is Named

    def test_repr(self):
        """Test string representation."""
        assert repr(leaf('x')) == "TreeNode('x')"
        assert repr(tree('x', ['y'])) == "TreeNode('x', [TreeNode('y')])"

    def test_copy_and_deepcopy(self):
        """Test nodes survive copy and deepcopy with equal structure."""
        node = tree(0, [1, tree(2, [3, 4])])
        assert copy.copy(node) == node
        duplicate = copy.deepcopy(node)
        assert duplicate == node
        assert duplicate.children[1] == node.children[1]

    def test_pickle(self):
        """Test nodes pickle back to equal, still immutable values."""
        node = tree('mic', ['igg', tree('dee', ['bee'])])
        restored = pickle.loads(pickle.dumps(node))
        assert restored == node
        assert type(restored.children) is tuple
        with pytest.raises(AttributeError):
            restored.label = 'x'


class TestCodec:
    """Tests for plain-data and JSON conversion."""

    def test_tree_to_data(self):
        """Test trees become nested [label, children] lists."""
        data = codec.tree_to_data(tree('mic', ['igg', tree('dee', ['bee'])]))
        assert data == ['mic', [['igg', []], ['dee', [['bee', []]]]]]

    def test_tree_from_data(self):
        """Test nested lists become TreeNodes."""
        node = codec.tree_from_data(['mic', [['igg', []], ['dee', []]]])
        assert node == tree('mic', ['igg', 'dee'])

    def test_label_encode_decode(self):
        """Test labels pass through encode and decode."""
        data = codec.tree_to_data(tree(1, [2]), encode=str)
        assert data == ['1', [['2', []]]]
        assert codec.tree_from_data(data, decode=int) == tree(1, [2])

    def test_custom_make(self):
        """Test tree_from_data builds nodes with a custom constructor."""
        data = ['a', [['b', []]]]
        result = codec.tree_from_data(data, make=lambda label, children: (label, list(children)))
        assert result == ('a', [('b', [])])

    @pytest.mark.parametrize('data', ['x', ['x'], ['x', 'y'], ['x', [], 'extra']])
    def test_malformed_tree(self, data):
        """Test malformed tree data raises CodecError."""
        with pytest.raises(CodecError):
            codec.tree_from_data(data)

    def test_forest(self):
        """Test forests become lists of encoded trees."""
        forest = (leaf('ann'), tree('mic', ['igg']))
        data = codec.forest_to_data(forest)
        assert data == [['ann', []], ['mic', [['igg', []]]]]
        assert codec.forest_from_data(data) == forest

    def test_paths(self):
        """Test paths become plain lists of ints."""
        assert codec.path_to_data(TreePath([1, 0])) == [1, 0]
        assert codec.path_from_data([1, 0]) == TreePath([1, 0])
        assert codec.forest_path_to_data(ForestPath(1, [2])) == [1, [2]]
        assert codec.forest_path_from_data([1, [2]]) == ForestPath(1, [2])

    @pytest.mark.parametrize('data', [[-1], 'abc', [1.5]])
    def test_malformed_path(self, data):
        """Test malformed path data raises CodecError."""
        with pytest.raises(CodecError):
            codec.path_from_data(data)

    @pytest.mark.parametrize('data', [[1], [-1, []], ['a', [0]], [0, [-3]]])
    def test_malformed_forest_path(self, data):
        """Test malformed forest path data raises CodecError."""
        with pytest.raises(CodecError):
            codec.forest_path_from_data(data)

    def test_dumps_loads_tree(self):
        """Test JSON round trip of a tree."""
        node = tree('mic', ['igg', 'dee'])
        text = codec.dumps(node)
        assert json.loads(text) == ['mic', [['igg', []], ['dee', []]]]
        assert codec.loads(text) == node

    def test_dumps_loads_forest_and_paths(self):
        """Test JSON round trip of forests and paths."""
        forest = (leaf('ann'), leaf('bob'))
        assert codec.loads(codec.dumps(forest), kind='forest') == forest
        assert codec.loads(codec.dumps(TreePath([3])), kind='path') == TreePath([3])
        fp = ForestPath(2, [1])
        assert codec.loads(codec.dumps(fp), kind='forest_path') == fp

    def test_loads_invalid_json(self):
        """Test invalid JSON raises CodecError."""
        with pytest.raises(CodecError, match="Invalid JSON"):
            codec.loads('[1,')

    def test_loads_unknown_kind(self):
        """Test an unknown kind raises ValueError."""
        with pytest.raises(ValueError, match="Unknown kind"):
            codec.loads('[]', kind='bag')

    def test_dumps_unsupported(self):
        """Test unsupported values raise TypeError."""
        with pytest.raises(TypeError, match="Cannot serialize"):
            codec.dumps(42)
