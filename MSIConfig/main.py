import json
import sys
from typing import Union, List

from dotenv import load_dotenv

from MSIConfig.config.env_variables import log_environment_variables
from MSIConfig.config.logger_config import setup_logging, get_logger
from MSIConfig.config.msi_config import Config
from MSIConfig.metadata.errors import InvalidMetadata
from MSIConfig.services import Services


def main(args: Union[str, List[str]] = None) -> int:
    load_dotenv()  # Load environment variables from a .env file
    # setup up config
    config = Config()
    config.parse(args)  # Parse arguments from config file or command-line

    # setup logging
    setup_logging(console_level=config.log_level, log_dir=config.log_dir)

    # log config parameters
    config.log_parameters()

    logger = get_logger(__name__)
    # log environment variables
    log_environment_variables()

    if config.metadata_file is None:
        logger.error("No metadata file given, use --metadata_file.")
        return 1

    try:
        with open(config.metadata_file, "r") as f:
            metadata = json.load(f)
    except FileNotFoundError:
        logger.error(f"Metadata file '{config.metadata_file}' does not exist.")
        return 1
    except json.JSONDecodeError as e:
        logger.error(f"Metadata file '{config.metadata_file}' is not valid JSON: {e}")
        return 1

    # deriving a configuration needs neither the database nor the bus
    with Services.from_config(config, with_database=False) as services:
        try:
            processing_config = services.generator.generate(metadata)
        except InvalidMetadata as e:
            logger.error(f"Invalid metadata: {e}", extra={"meta": {"field": e.field}})
            return 1

    output = json.dumps(processing_config.to_dict(), indent=2)
    if config.output_file is None:
        sys.stdout.write(output + "\n")
    else:
        with open(config.output_file, "w") as f:
            f.write(output + "\n")
        logger.info(f"Processing configuration written to '{config.output_file}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
