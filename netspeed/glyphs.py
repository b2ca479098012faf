def surrogatepass(code):
    return code.encode("utf-16", "surrogatepass").decode("utf-16")


arrow_down = "↓"
arrow_up = "↑"

icon_spacer = "  "

md_alert = surrogatepass("\udb80\udc26")
md_timer_outline = surrogatepass("\udb81\udd1b")
