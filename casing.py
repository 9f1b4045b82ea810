from __future__ import annotations

from difflib import SequenceMatcher
from itertools import zip_longest


def transfer_casing_for_matching_text(text_w_casing: str, text_wo_casing: str) -> str:
    """Copy the casing of *text_w_casing* onto *text_wo_casing*, character by
    character. Both strings must have the same length.

    Raises
    ------
    ValueError
        If the two texts have different lengths.
    """
    if len(text_w_casing) != len(text_wo_casing):
        raise ValueError("The 'text_w_casing' and 'text_wo_casing' don't have the same length, "
                         "so you can't use them with this method, you should be using the more "
                         "general transfer_casing_for_similar_text() method.")
    return "".join(
        y.upper() if x.isupper() else y.lower()
        for x, y in zip(text_w_casing, text_wo_casing)
    )


def transfer_casing_for_similar_text(text_w_casing: str, text_wo_casing: str) -> str:
    """Apply the casing of *text_w_casing* to a similar, lowercase text.

    The two texts are aligned with :class:`difflib.SequenceMatcher`:

    - equal regions keep the original characters;
    - replaced regions copy the casing character by character, and any surplus
      characters continue the case of the last copied one;
    - inserted regions take the case of the preceding original character, or of
      the following one when the insertion starts a word;
    - deleted regions produce nothing.
    """
    if not text_wo_casing:
        return text_wo_casing
    if not text_w_casing:
        # nothing to copy from
        return text_wo_casing

    matcher = SequenceMatcher(None, text_w_casing.lower(), text_wo_casing)
    cased = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "insert":
            # word start: use the case of the next original character, if any
            if i1 == 0 or text_w_casing[i1 - 1] == " ":
                if i1 < len(text_w_casing) and text_w_casing[i1].isupper():
                    cased.append(text_wo_casing[j1:j2].upper())
                else:
                    cased.append(text_wo_casing[j1:j2].lower())
            elif text_w_casing[i1 - 1].isupper():
                cased.append(text_wo_casing[j1:j2].upper())
            else:
                cased.append(text_wo_casing[j1:j2].lower())
        elif tag == "equal":
            cased.append(text_w_casing[i1:i2])
        elif tag == "replace":
            w_casing = text_w_casing[i1:i2]
            wo_casing = text_wo_casing[j1:j2]
            if len(w_casing) == len(wo_casing):
                cased.append(transfer_casing_for_matching_text(w_casing, wo_casing))
            else:
                last = "lower"
                for w, wo in zip_longest(w_casing, wo_casing):
                    if w and wo:
                        if w.isupper():
                            cased.append(wo.upper())
                            last = "upper"
                        else:
                            cased.append(wo.lower())
                            last = "lower"
                    elif wo:
                        cased.append(wo.upper() if last == "upper" else wo.lower())
        # "delete" regions are dropped
    return "".join(cased)
