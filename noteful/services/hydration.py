"""
Noteful API: Note Hydration
===========================

What:  Folds the flat result of the notes ⟕ folders ⟕ notes_tags ⟕ tags
       select into one nested object per note.
How:   Single pass over the rows, keyed by note id. Python dicts keep
       insertion order, so the output order is the order in which each note
       id first appears.

Example:
    rows:
        {id: 1, title: "A", ..., tagId: 3, tagName: "x"}
        {id: 1, title: "A", ..., tagId: 4, tagName: "y"}
        {id: 2, title: "B", ..., tagId: None, tagName: None}
    result:
        [{id: 1, ..., tags: [{id: 3, name: "x"}, {id: 4, name: "y"}]},
         {id: 2, ..., tags: []}]
"""

from typing import Any, Dict, Iterable, List, Mapping


def hydrate_notes(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Merge joined note rows into hydrated note dicts.

    Each row must expose `id`, `title`, `content`, `folderId`, `folderName`,
    `tagId` and `tagName` (SQLAlchemy RowMapping or plain dict). A tag is
    appended once per note even if the join produced it more than once.
    """
    hydrated: Dict[Any, Dict[str, Any]] = {}
    seen_tags: Dict[Any, set] = {}

    for row in rows:
        note_id = row["id"]
        note = hydrated.get(note_id)
        if note is None:
            note = {
                "id": note_id,
                "title": row["title"],
                "content": row["content"],
                "folderId": row["folderId"],
                "folderName": row["folderName"],
                "tags": [],
            }
            hydrated[note_id] = note
            seen_tags[note_id] = set()

        tag_id = row["tagId"]
        if tag_id is not None and tag_id not in seen_tags[note_id]:
            seen_tags[note_id].add(tag_id)
            note["tags"].append({"id": tag_id, "name": row["tagName"]})

    return list(hydrated.values())
