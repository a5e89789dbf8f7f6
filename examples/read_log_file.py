from bppcell import FilterPolicy, FlightPath, write_flight_path

if __name__ == '__main__':
    filename = 'DATALOG.txt'
    flight_path = FlightPath.from_file(filename, name='NS-100', policy=FilterPolicy.drop)

    print(f'number of coordinates: {len(flight_path)}')
    print(f'lines without GPS fix: {flight_path.missing_fixes}')
    print(f'maximum altitude (m): {flight_path.max_altitude}')
    print(f'landing site: {flight_path.landing_site}')

    write_flight_path(flight_path, 'NS-100.kml')
