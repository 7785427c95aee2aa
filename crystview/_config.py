import copy
import logging
from io import StringIO
from collections.abc import Iterable
from typing import Optional, Union, Any, Type, TypeVar

import numpy as np
import yaml
try:
    from yaml import CSafeLoader as SafeLoader
    from yaml import CSafeDumper as SafeDumper
except ImportError:
    from yaml import SafeLoader                                                                     # type: ignore[assignment]
    from yaml import SafeDumper                                                                     # type: ignore[assignment]

from ._typehints import FileHandle
from . import util
from . import lattice
from . import view


logger = logging.getLogger(__name__)

MyType = TypeVar('MyType', bound='Config')

class NiceDumper(SafeDumper):
    """Improve YAML readability for humans."""

    def represent_data(self,
                       data: Any):
        """Cast Config objects and their subclasses to dict."""
        if isinstance(data, dict) and type(data) is not dict:
            return self.represent_data(dict(data))
        if isinstance(data, np.ndarray):
            return self.represent_data(data.tolist())
        if isinstance(data, np.generic):
            return self.represent_data(data.item())

        return super().represent_data(data)

    def ignore_aliases(self,
                       data: Any) -> bool:
        """Do not use references to existing objects."""
        return True


class Config(dict):
    """
    YAML-based configuration of numerical tolerances.

    Keys
    ----
    snap_zero : float
        Lattice basis entries below this absolute value are set to zero.
    parallel : float
        Projection and up vector are parallel if the absolute value of
        their scalar product exceeds 1 - parallel.
    orthogonality : float
        Up vector is orthogonalized if the absolute value of its scalar
        product with the projection vector exceeds this value.
    zero_component : float
        Components below this absolute value are ignored in integer reduction.
    integer_match : float
        Maximum distance of a scaled component to the nearest integer.
    max_int : int
        Largest scale factor searched in integer reduction.
    """

    defaults = {
                'snap_zero':      lattice.SNAP_ZERO,
                'parallel':       view.PARALLEL,
                'orthogonality':  view.ORTHOGONALITY,
                'zero_component': util.ZERO_COMPONENT,
                'integer_match':  util.INTEGER_MATCH,
                'max_int':        util.MAX_INT,
               }

    def __init__(self,
                 config: Optional[Union[str, dict[str, Any]]] = None,
                 **kwargs):
        """
        New YAML-based configuration.

        Parameters
        ----------
        config : dict or str, optional
            Configuration. String needs to be valid YAML.
        **kwargs : arbitrary key–value pairs, optional
            Top-level entries of the configuration.

        Notes
        -----
        Values given as key–value pairs take precedence
        over entries with the same key in 'config',
        which take precedence over the defaults.
        """
        if isinstance(config,str):
            loaded = yaml.load(config, Loader=SafeLoader) or {}
            if not isinstance(loaded,dict):
                raise ValueError(f'configuration "{config}" is not a mapping')
            kwargs = loaded | kwargs
        elif isinstance(config,dict):
            kwargs = config | kwargs

        super().__init__(**(self.defaults | kwargs))


    def __repr__(self) -> str:
        """
        Return repr(self).

        Show as in file.
        """
        output = StringIO()
        self.save(output)
        output.seek(0)
        return ''.join(output.readlines())


    def __copy__(self: MyType) -> MyType:
        """
        Return deepcopy(self).

        Create deep copy.
        """
        return copy.deepcopy(self)

    copy = __copy__


    def __or__(self: MyType,
               other) -> MyType:
        """
        Return self|other.

        Update configuration with contents of other.

        Parameters
        ----------
        other : crystview.Config or dict
            Key–value pairs that update self.

        Returns
        -------
        updated : crystview.Config
            Updated configuration.
        """
        duplicate = self.copy()
        duplicate.update(other)
        return duplicate


    def __ior__(self: MyType,
                other) -> MyType:
        """
        Return self|=other.

        Update configuration with contents of other (in-place).

        Parameters
        ----------
        other : crystview.Config or dict
            Key–value pairs that update self.
        """
        self.update(other)
        return self


    def delete(self: MyType,
               keys: Union[Iterable, str]) -> MyType:
        """
        Reset configuration keys to their defaults.

        Parameters
        ----------
        keys : iterable or scalar
            Label of the key(s) to reset.

        Returns
        -------
        updated : crystview.Config
            Updated configuration.
        """
        duplicate = self.copy()
        for k in util.to_list(keys):
            del duplicate[k]
            if k in self.defaults: duplicate[k] = self.defaults[k]
        return duplicate


    @classmethod
    def load(cls: Type[MyType],
             fname: FileHandle) -> MyType:
        """
        Load from YAML file.

        Parameters
        ----------
        fname : file, str, or pathlib.Path
            Filename or file to read.

        Returns
        -------
        loaded : crystview.Config
            Configuration from file.
        """
        with util.open_text(fname) as fhandle:
            return cls(yaml.load(fhandle, Loader=SafeLoader))


    def save(self,
             fname: FileHandle,
             **kwargs):
        """
        Save to YAML file.

        Parameters
        ----------
        fname : file, str, or pathlib.Path
            Filename or file to write.
        **kwargs : dict
            Keyword arguments parsed to yaml.dump.
        """
        for key,default in [('width',256),
                            ('default_flow_style',None),
                            ('sort_keys',False),
                            ('allow_unicode',True),
                            ('Dumper',NiceDumper)]:
            if key not in kwargs:
                kwargs[key] = default

        with util.open_text(fname,'w') as fhandle:
            fhandle.write(yaml.dump(self,**kwargs))


    @property
    def is_valid(self) -> bool:
        """
        Check for valid content.

        All keys are known, tolerances are positive numbers,
        and 'max_int' is a positive integer.
        """
        ok = True
        for k,v in self.items():
            if k not in self.defaults:
                logger.warning(f'unknown key "{k}"')
                ok = False
            elif k == 'max_int':
                if isinstance(v,bool) or not isinstance(v,(int,np.integer)) or v < 1:
                    logger.warning(f'invalid maximum integer "{v}"')
                    ok = False
            elif isinstance(v,bool) or not isinstance(v,(int,float,np.number)) or not v > 0:
                logger.warning(f'invalid tolerance "{k}: {v}"')
                ok = False

        return ok
