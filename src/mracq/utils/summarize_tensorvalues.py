"""Summarize the values of a tensor to a string."""

import torch


def summarize_tensorvalues(tensor: torch.Tensor | None, summarization_threshold: int = 7) -> str:
    """Summarize the values of a tensor to a string.

    Long tensors are shortened to their first and last values, e.g. ``[-0.5, -0.25, 0, ..., 0.25]``.

    Parameters
    ----------
    tensor
        The tensor to summarize. `None` results in ``'None'``.
    summarization_threshold
        The number of elements above which the values are summarized.
    """
    if tensor is None:
        return 'None'
    if tensor.numel() == 0:
        return f'[] (shape {list(tensor.shape)})'
    edgeitems = min(3, max(1, (summarization_threshold - 1) // 2))
    with torch._tensor_str.printoptions(threshold=summarization_threshold, edgeitems=edgeitems):
        return torch._tensor_str._tensor_str(tensor.detach(), 0)
