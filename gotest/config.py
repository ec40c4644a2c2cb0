import os
import logging
import tempfile
import yaml

from collections.abc import Mapping

from gotest.exceptions import ConfigError

log = logging.getLogger(__name__)


class YamlConfig(Mapping):
    """
    A read-only configuration object populated by parsing a yaml file, with
    optional default values. Nothing is read until load() is called.
    """
    _defaults = dict()

    def __init__(self, yaml_path=None):
        self.yaml_path = yaml_path
        self._conf = dict()

    @property
    def path(self):
        return self.yaml_path

    def load(self, conf=None):
        """
        Read the configuration.

        :param conf: a yaml string or stream to use instead of the file
        :raises ConfigError: if the yaml can't be read or isn't a mapping
        """
        source = '<string>' if conf is not None else self.path
        try:
            if conf is not None:
                loaded = yaml.safe_load(conf)
            elif source and os.path.exists(source):
                with open(source) as f:
                    loaded = yaml.safe_load(f)
            else:
                log.debug("%s not found", source)
                loaded = dict()
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError("{path}: {exc}".format(path=source, exc=exc))
        if loaded is None:
            loaded = dict()
        if not isinstance(loaded, dict):
            raise ConfigError(
                "{path}: expected a mapping at the top level, got {kind}".format(
                    path=source,
                    kind=type(loaded).__name__,
                )
            )
        self._conf = loaded

    def __getitem__(self, name):
        return self.__getattr__(name)

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        return self._conf.get(name, self._defaults.get(name))

    def __contains__(self, name):
        return self._conf.__contains__(name)

    def __iter__(self):
        return self._conf.__iter__()

    def __len__(self):
        return self._conf.__len__()


class GotestConfig(YamlConfig):
    """
    This class is intended to unify all configuration for gotest.

    Unless given a path, it reads the file named in $GOTEST_CONFIG, falling
    back to ~/.gotest.yaml. A missing file simply means the defaults below
    apply.
    """
    default_path = os.path.expanduser('~/.gotest.yaml')
    _defaults = {
        'go': 'go',
        'cover_profile': os.path.join(tempfile.gettempdir(), 'cover.out'),
        'cover_html': os.path.join(tempfile.gettempdir(), 'cover.html'),
        'cover_mode': 'atomic',
        'skip_dirs': ['vendor', 'testdata'],
        'ignore': [],
        'opener': None,
        'open_report': True,
    }

    @property
    def path(self):
        return self.yaml_path or os.environ.get('GOTEST_CONFIG') or \
            self.default_path


config = GotestConfig()
