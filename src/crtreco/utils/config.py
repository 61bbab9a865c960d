"""Module in charge of loading CRT reconstruction configuration files."""

import os
import re
from copy import deepcopy

import yaml

__all__ = ["load_config", "load_config_string"]

# Keys of the form `block.sub_block.parameter` are treated as overrides
DOTTED_KEY = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*(?:\.[a-zA-Z_][a-zA-Z0-9_]*)+$")


class ConfigLoader(yaml.SafeLoader):
    """YAML loader which supports the `!include` tag.

    The tag loads another YAML file in place of the tagged node, e.g.

    .. code-block:: yaml

        geometry: !include crt_geometry.yaml

    Relative paths are resolved with respect to the directory of the file
    which contains the tag.
    """

    def __init__(self, stream, root_dir=None):
        """Initialize the loader.

        Parameters
        ----------
        stream : Union[_io.TextIOWrapper, str]
            Open YAML file or YAML string
        root_dir : str, optional
            Directory used to resolve relative include paths. If not
            specified, it is inferred from the stream (or the current
            working directory for strings).
        """
        if root_dir is None:
            name = getattr(stream, "name", None)
            root_dir = os.path.dirname(name) if name else os.getcwd()
        self._root = root_dir

        super().__init__(stream)

    def include(self, node):
        """Load and include a YAML file that is requested in the base config.

        Parameters
        ----------
        node : yaml.ScalarNode
            Node which contains the name of the file to include
        """
        filename = os.path.join(self._root, self.construct_scalar(node))
        with open(filename, "r", encoding="utf-8") as f:
            return yaml.load(f, Loader=ConfigLoader)


ConfigLoader.add_constructor("!include", ConfigLoader.include)


def deep_merge(base, update):
    """Recursively merges the `update` dictionary into a copy of `base`.

    Parameters
    ----------
    base : dict
        Base dictionary
    update : dict
        Dictionary whose values take precedence

    Returns
    -------
    dict
        Merged dictionary
    """
    result = deepcopy(base)
    for key, value in update.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def set_nested_value(config, key_path, value):
    """Sets a nested value in a dictionary using dot notation.

    Parameters
    ----------
    config : dict
        Configuration dictionary to modify in place
    key_path : str
        Dot-separated path to the key (e.g. "post.crt_cluster.priority")
    value : object
        Value to set
    """
    keys = key_path.split(".")
    current = config
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise ValueError(f"Cannot set '{key_path}': '{key}' is not a dictionary")
        current = current[key]

    current[keys[-1]] = value


def split_directives(config):
    """Separates the include directives and the dot-notation overrides from
    the regular configuration blocks.

    Parameters
    ----------
    config : dict
        Loaded YAML configuration dictionary

    Returns
    -------
    List[str]
        List of files to include
    Dict[str, object]
        Dictionary of dot-notation overrides
    dict
        Remaining configuration blocks
    """
    includes, overrides, cleaned = [], {}, {}
    for key, value in config.items():
        if key == "include":
            if isinstance(value, str):
                includes.append(value)
            elif isinstance(value, list):
                includes.extend(value)
            else:
                raise ValueError(
                    f"'include' must be a string or list of strings, got {type(value)}"
                )
        elif DOTTED_KEY.match(key):
            overrides[key] = value
        else:
            cleaned[key] = value

    return includes, overrides, cleaned


def parse_value(value):
    """Parses a string override into the appropriate Python type.

    Parameters
    ----------
    value : object
        Override value, possibly provided as a string

    Returns
    -------
    object
        Parsed value
    """
    if not isinstance(value, str):
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def _resolve(main_config, root_dir):
    """Applies the include and override directives of a loaded configuration.

    Parameters
    ----------
    main_config : dict
        Raw configuration dictionary
    root_dir : str
        Directory used to resolve relative include paths

    Returns
    -------
    dict
        Fully resolved configuration dictionary
    """
    if main_config is None:
        return {}

    includes, overrides, cleaned = split_directives(main_config)

    # Included files come first, the current file takes precedence
    config = {}
    for include_file in includes:
        include_path = os.path.join(root_dir, include_file)
        if not os.path.exists(include_path):
            raise FileNotFoundError(f"Included file not found: {include_path}")

        config = deep_merge(config, load_config(include_path))

    config = deep_merge(config, cleaned)

    for key_path, value in overrides.items():
        set_nested_value(config, key_path, parse_value(value))

    return config


def load_config(cfg_path):
    """Load a configuration file to a dictionary.

    This function supports:
    - Including other YAML files: "include: base.yaml" or
      "include: [base.yaml, other.yaml]"
    - Including files within blocks: "key: !include file.yaml"
    - Overriding nested parameters with dot notation:
      "post.crt_cluster.coincidence_window: 100"

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    root_dir = os.path.dirname(os.path.abspath(cfg_path))
    with open(cfg_path, "r", encoding="utf-8") as f:
        main_config = yaml.load(f, Loader=ConfigLoader)

    return _resolve(main_config, root_dir)


def load_config_string(config_string, root_dir=None):
    """Load a configuration provided as a YAML string.

    Parameters
    ----------
    config_string : str
        YAML configuration
    root_dir : str, optional
        Directory used to resolve relative include paths (defaults to the
        current working directory)

    Returns
    -------
    dict
        Loaded and merged configuration dictionary
    """
    root_dir = root_dir or os.getcwd()
    loader = ConfigLoader(config_string, root_dir)
    try:
        main_config = loader.get_single_data()
    finally:
        loader.dispose()

    return _resolve(main_config, root_dir)
