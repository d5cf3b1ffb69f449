from typing import Hashable, Iterator, List, Optional, Set


class PathSets:
    """
    Disjoint sets of cell indexes already joined by open passages.

    An item that no set tracks yet is its own implicit singleton.
    Lookups are a linear scan over the sets. The generator calls retain()
    after each row advance, so sets only ever hold cells of the current row
    and both their number and their sizes stay bounded by the row width.
    """

    def __init__(self, sets: Optional[List[Set[Hashable]]] = None):
        self.sets: List[Set[Hashable]] = sets if sets is not None else []

    def __iter__(self) -> Iterator[Set[Hashable]]:
        return iter(self.sets)

    def __len__(self) -> int:
        return len(self.sets)

    def find(self, item) -> Optional[Set[Hashable]]:
        for item_set in self.sets:
            if item in item_set:
                return item_set
        return None

    def same_set(self, item1, item2) -> bool:
        set1 = self.find(item1)
        return set1 is not None and set1 is self.find(item2)

    def track(self, item) -> Set[Hashable]:
        """Returns the set holding `item`, materializing a singleton if needed."""
        item_set = self.find(item)
        if item_set is None:
            item_set = {item}
            self.sets.append(item_set)
        return item_set

    def join(self, item1, item2) -> Set[Hashable]:
        """Puts both items into one set and returns it."""
        set1 = self.find(item1)
        set2 = self.find(item2)

        if set1 is None and set2 is None:
            joined = {item1, item2}
            self.sets.append(joined)
            return joined

        if set1 is None:
            set2.add(item1)
            return set2

        if set2 is None:
            set1.add(item2)
            return set1

        if set1 is not set2:
            # Fold the smaller set into the larger one
            if len(set1) < len(set2):
                set1, set2 = set2, set1
            set1.update(set2)
            self.sets = [s for s in self.sets if s is not set2]
        return set1

    def retain(self, items):
        """Drops every member not in `items`, and with them any set left empty."""
        keep = set(items)
        for item_set in self.sets:
            item_set &= keep
        self.sets = [s for s in self.sets if s]
