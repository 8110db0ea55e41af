import yaml
import logging

logger = logging.getLogger(__name__)

def load_yaml(file_path):
    """
    Load a YAML file and return its content.
    
    :param file_path: Path to the YAML file.
    :return: Content of the YAML file as a dictionary, empty if the file is blank.
    """
    with open(file_path, 'r', encoding='utf-8') as file:
        return yaml.safe_load(file) or {}


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
    )
