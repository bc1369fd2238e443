"""Wording for error messages about observations and labels"""
from typing import Iterable


def plural(noun: str, n: int):
    "plural('label', 2) -> 'labels'"
    return noun if n == 1 else f'{noun}s'


def n_of(n: int, noun: str):
    "n_of(3, 'observation') -> '3 observations'"
    return f"{n} {plural(noun, n)}"


def enumeration(labels: Iterable[str]):
    "['a', 'b', 'c'] -> \"'a', 'b' and 'c'\""
    labels = [repr(label) for label in labels]
    if not labels:
        raise ValueError("labels: empty")
    elif len(labels) == 1:
        return labels[0]
    return f"{', '.join(labels[:-1])} and {labels[-1]}"
