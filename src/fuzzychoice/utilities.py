""" Useful utility functions """

import os
from multiprocess import Pool
from itertools import repeat

from typing import List, Any, Callable, Dict


def check_folder(folder='images/'):
    """
    check if folder exists, make if not present

    Parameters
    ----------
    folder : str, optional
        name of directory to check, by default 'images/'
    """
    if not os.path.exists(folder):
        os.makedirs(folder)


def starmap_with_kwargs(pool, fn, args_iter, kwargs_iter):
    """
    https://stackoverflow.com/questions/45718523/pass-kwargs-to-starmap-while-using-pool-in-python
    """
    args_for_starmap = zip(repeat(fn), args_iter, kwargs_iter)
    return pool.starmap(apply_args_and_kwargs, args_for_starmap)


def apply_args_and_kwargs(fn, args, kwargs):
    return fn(*args, **kwargs)


def parallel_sampling(func: Callable,
                      vargs_iterator: List[List[Any]], fargs: List[Any] = None,
                      fkwargs: Dict[str, Any] = None, num_threads: int = 1) -> List[Any]:
    """
    function used to run independent computations, in parallel if requested

    Parameters
    ----------
    func : Callable
        function to parallelize
    vargs_iterator : List[List[Any]]
        iterator of arguments, one entry per call
    fargs : List[Any], optional
        fixed arguments appended to every call, by default None
    fkwargs : Dict[str, Any], optional
        fixed keyword arguments passed to every call, by default None
    num_threads : int, optional
        number of parallel processes, by default 1

    Returns
    -------
    List[Any]
        results in the order of vargs_iterator
    """
    fargs = [] if fargs is None else list(fargs)
    fkwargs = {} if fkwargs is None else fkwargs

    args_iter = [[*vargs, *fargs] for vargs in vargs_iterator]
    kwargs_iter = [fkwargs.copy() for _ in args_iter]

    if num_threads > 1:
        with Pool(num_threads) as pool:
            results = starmap_with_kwargs(pool, func, args_iter, kwargs_iter)
    else:
        results = []
        for args, kwargs in zip(args_iter, kwargs_iter):
            result = func(*args, **kwargs)
            results.append(result)

    return results
