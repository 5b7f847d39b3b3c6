"""
Services supplied through a Context environment instead of constructor arguments.

Run: python examples/environment_demo.py
"""
from blueprintpy import ConsoleLogger, Context, Logger, Random, Runtime, log_info, random_int_between


def main():
    program = random_int_between(1, 65).flat_map(
        lambda n: log_info(f"Random number of the day is {n}")
    )

    env = (Context()
           .with_service(Logger, ConsoleLogger("env-demo"))
           .with_service(Random, Random()))

    # The same program runs against any environment that has the services
    Runtime(env).run(program)


if __name__ == "__main__":
    main()
