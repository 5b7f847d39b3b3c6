"""
Producer and consumer hammering one bounded cache from two fibers.

Run: python examples/tags_cache_demo.py
"""
import anyio

from blueprintpy import AnyIORuntime, BoundedCache, ConsoleLogger, Random, Runtime, Tag, TagId


async def main():
    logger = ConsoleLogger("tags-cache", level="DEBUG")
    cache = Runtime.default.run(BoundedCache.make(logger))
    rnd = Random()

    producer = (
        rnd.next_int_between(1, 11)
        .map(Tag.from_int)
        .flat_map(lambda tag: cache.set(tag.id, tag.name))
        .repeat_n(30)
    )
    consumer = (
        rnd.next_int_between(1, 11)
        .map(TagId)
        .flat_map(cache.get)
        .repeat_n(30)
    )

    async with AnyIORuntime() as rt:
        p = await rt.fork(producer)
        c = await rt.fork(consumer)
        await p.join()
        await c.join()
        await rt.run(logger.info("Finished"))


if __name__ == "__main__":
    anyio.run(main)
