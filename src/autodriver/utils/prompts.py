"""Interactive prompt utilities"""

from autodriver.utils.logger import logger


def prompt_yes_no(prompt, default='n', input_fn=input):
    """
    Interactive yes/no prompt

    Args:
        prompt: Question to ask
        default: Answer used for an empty reply ('y' or 'n')
        input_fn: Reads one line from the user

    Returns:
        bool: True for yes, False for no
    """
    hint = "[Y/n]" if default == 'y' else "[y/N]"
    while True:
        try:
            response = input_fn(f"{prompt} {hint}: ").strip().lower()
        except EOFError:
            response = ''
        response = response or default

        if response in ('y', 'yes'):
            return True
        if response in ('n', 'no'):
            return False
        logger.error("Please answer yes or no.")
