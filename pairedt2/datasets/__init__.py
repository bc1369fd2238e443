from ._simple import get_landmarks, get_paired
